"""
JsValidation CLI
================

Command-line interface for JsValidation.

Commands:
- publish: Copy the configuration file and views into an application
- rules: Print the client rule map of a rules dict or form request
- render: Print the rendered validation script
"""

from jsvalidation.cli.main import main, cli

__all__ = ["main", "cli"]
