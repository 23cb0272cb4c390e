"""
JsValidation Utils Package
==========================

Nested-data helpers and structured logging.
"""

from __future__ import annotations

from jsvalidation.utils.logger import Logger, LogLevel, get_logger, configure_logging
from jsvalidation.utils.helpers import (
    snake_case,
    studly_case,
    str_is,
    get_nested,
    has_nested,
    set_nested,
    dot,
    html_name,
    dotted_name,
    is_numeric,
    to_number,
    parse_date,
    parse_date_format,
)

__all__ = [
    # Logging
    "Logger",
    "LogLevel",
    "get_logger",
    "configure_logging",
    # String helpers
    "snake_case",
    "studly_case",
    "str_is",
    # Nested data helpers
    "get_nested",
    "has_nested",
    "set_nested",
    "dot",
    "html_name",
    "dotted_name",
    # Value helpers
    "is_numeric",
    "to_number",
    "parse_date",
    "parse_date_format",
]
