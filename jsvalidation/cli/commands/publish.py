"""
JsValidation CLI Publish Command
================================

Copy the configuration file and views into an application for editing.
"""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import List, Tuple

from jsvalidation.engine.template import VIEWS_PATH

CONFIG_TEMPLATE = Path(__file__).resolve().parent.parent.parent / "resources" / "config.py"

CONFIG_TARGET = Path("config") / "jsvalidation.py"

VIEWS_TARGET = Path("resources") / "views" / "vendor" / "jsvalidation"

TAGS = ("config", "views", "all")


def publish(tag: str = "all", path: str = ".", force: bool = False) -> int:
    """
    Publish package resources.

    Args:
        tag: Resources to publish: config, views or all
        path: Application root
        force: Overwrite existing files

    Returns:
        Exit code
    """
    root = Path(path)
    copies: List[Tuple[Path, Path]] = []

    if tag in ("config", "all"):
        copies.append((CONFIG_TEMPLATE, root / CONFIG_TARGET))

    if tag in ("views", "all"):
        for view in sorted(VIEWS_PATH.glob("*.html")):
            copies.append((view, root / VIEWS_TARGET / view.name))

    published = 0
    for source, target in copies:
        if target.exists() and not force:
            print(f"  Skipped {target} (exists, use --force to overwrite)")
            continue

        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(source, target)
        print(f"  Published {target}")
        published += 1

    print(f"Published {published} file(s).")
    return 0
