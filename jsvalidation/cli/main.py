"""
JsValidation CLI Main Module
============================

Main CLI entry point with all commands.
"""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from jsvalidation import __version__


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser."""
    parser = argparse.ArgumentParser(
        prog="jsvalidation",
        description="JsValidation CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  jsvalidation publish                          Publish config and views
  jsvalidation publish --tag views --force      Overwrite published views
  jsvalidation rules app.forms:StoreUserRequest Print the client rule map
  jsvalidation render app.forms:RULES --view jsvalidation::bootstrap5
        """,
    )

    parser.add_argument(
        "-v", "--version",
        action="version",
        version=f"JsValidation {__version__}",
    )
    parser.add_argument(
        "--config",
        help="Python configuration file to load",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Publish command
    publish_parser = subparsers.add_parser(
        "publish",
        help="Publish the configuration file and views",
    )
    publish_parser.add_argument(
        "--tag",
        choices=["config", "views", "all"],
        default="all",
        help="Resources to publish",
    )
    publish_parser.add_argument(
        "--path",
        default=".",
        help="Application root",
    )
    publish_parser.add_argument(
        "--force",
        action="store_true",
        help="Overwrite existing files",
    )

    # Rules command
    rules_parser = subparsers.add_parser(
        "rules",
        help="Print the client rule map as JSON",
    )
    rules_parser.add_argument(
        "target",
        help="Rules dict or FormRequest class as module:attribute",
    )
    rules_parser.add_argument(
        "--selector",
        help="CSS selector of the form",
    )
    rules_parser.add_argument(
        "--no-remote",
        action="store_true",
        help="Leave out rules validated through AJAX",
    )
    rules_parser.add_argument(
        "--pretty",
        action="store_true",
        help="Indent the JSON output",
    )

    # Render command
    render_parser = subparsers.add_parser(
        "render",
        help="Print the rendered validation script",
    )
    render_parser.add_argument(
        "target",
        help="Rules dict or FormRequest class as module:attribute",
    )
    render_parser.add_argument(
        "--view",
        help="View to render (e.g. jsvalidation::bootstrap4)",
    )
    render_parser.add_argument(
        "--selector",
        help="CSS selector of the form",
    )

    return parser


def cli(args: Optional[List[str]] = None) -> int:
    """
    Main CLI entry point.

    Args:
        args: Command line arguments (uses sys.argv if None)

    Returns:
        Exit code
    """
    parser = create_parser()
    parsed = parser.parse_args(args)

    if not parsed.command:
        parser.print_help()
        return 0

    handlers = {
        "publish": handle_publish,
        "rules": handle_rules,
        "render": handle_render,
    }

    handler = handlers.get(parsed.command)
    if handler is None:
        parser.print_help()
        return 1

    try:
        if parsed.config:
            load_config(parsed.config)
        return handler(parsed)
    except KeyboardInterrupt:
        print("\nAborted.")
        return 130
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def load_config(path: str) -> None:
    from jsvalidation.core.config import Config, set_config
    set_config(Config.from_file(path))


def handle_publish(args: argparse.Namespace) -> int:
    """Handle publish command."""
    from jsvalidation.cli.commands.publish import publish
    return publish(args.tag, args.path, args.force)


def handle_rules(args: argparse.Namespace) -> int:
    """Handle rules command."""
    from jsvalidation.cli.commands.rules import show_rules
    return show_rules(args.target, args.selector, not args.no_remote, args.pretty)


def handle_render(args: argparse.Namespace) -> int:
    """Handle render command."""
    from jsvalidation.cli.commands.rules import render_script
    return render_script(args.target, args.view, args.selector)


def main() -> None:
    """Main entry point."""
    sys.exit(cli())


if __name__ == "__main__":
    main()
