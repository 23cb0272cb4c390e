"""
JsValidation CLI Rules Command
==============================

Print the client rule map or the rendered script for a rules dict or a
form request class.

Targets are `module:attribute`, e.g. `app.forms:StoreUserRequest`.
"""

from __future__ import annotations

import importlib
import sys
from pathlib import Path
from typing import Any, Optional

import orjson

from jsvalidation.factory import JsValidatorFactory
from jsvalidation.javascript.javascript_validator import JavascriptValidator
from jsvalidation.validation.form import FormRequest


def load_target(target: str) -> Any:
    """Import the object named by `module:attribute`."""
    module_name, sep, attribute = target.partition(":")
    if not sep or not module_name or not attribute:
        raise ValueError(f"Target must be 'module:attribute', got '{target}'")

    if str(Path.cwd()) not in sys.path:
        sys.path.insert(0, str(Path.cwd()))

    obj: Any = importlib.import_module(module_name)
    for part in attribute.split("."):
        obj = getattr(obj, part)
    return obj


def build_validator(target: str, selector: Optional[str] = None, remote: bool = True) -> JavascriptValidator:
    """JavaScript validator for a rules dict or form request target."""
    obj = load_target(target)
    factory = JsValidatorFactory()

    if isinstance(obj, FormRequest) or (isinstance(obj, type) and issubclass(obj, FormRequest)):
        validator = factory.form_request(obj, selector)
    elif isinstance(obj, dict):
        validator = factory.make(obj, selector=selector)
    else:
        raise TypeError(f"'{target}' is neither a rules dict nor a FormRequest")

    return validator.remote(remote)


def show_rules(target: str, selector: Optional[str] = None, remote: bool = True, pretty: bool = False) -> int:
    """
    Print the rule map as JSON.

    Returns:
        Exit code
    """
    validator = build_validator(target, selector, remote)
    option = orjson.OPT_INDENT_2 if pretty else 0
    print(orjson.dumps(validator.to_dict(), option=option).decode("utf-8"))
    return 0


def render_script(target: str, view: Optional[str] = None, selector: Optional[str] = None) -> int:
    """
    Print the rendered validation script.

    Returns:
        Exit code
    """
    validator = build_validator(target, selector)
    print(validator.render(view))
    return 0
