"""
JsValidation Escaping
=====================

Context-aware encoding for generated messages and for JSON embedded
in the validation `<script>` tag.
"""

from __future__ import annotations

import html
from typing import Any

import orjson


_JS_REPLACEMENTS = {
    "\\": "\\\\",
    "'": "\\'",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "<": "\\x3c",
    ">": "\\x3e",
    "&": "\\x26",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}

# JSON is valid JavaScript; these keep it inert inside <script>
_SCRIPT_JSON_REPLACEMENTS = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


def escape_html(text: Any) -> str:
    """
    Escape HTML entities.

    Example:
        >>> escape_html("<b>name</b>")
        '&lt;b&gt;name&lt;/b&gt;'
    """
    if text is None:
        return ""
    return html.escape(str(text), quote=True)


def escape_js(text: Any) -> str:
    """Escape text for use inside a JavaScript string literal."""
    if not text:
        return ""

    result = str(text)
    for char, escaped in _JS_REPLACEMENTS.items():
        result = result.replace(char, escaped)
    return result


def json_script(value: Any) -> str:
    """
    Encode a value as JSON safe to embed in an inline `<script>`.

    Example:
        >>> json_script({"a": "</script>"})
        '{"a":"\\\\u003c/script\\\\u003e"}'
    """
    encoded = orjson.dumps(value).decode("utf-8")
    for char, escaped in _SCRIPT_JSON_REPLACEMENTS.items():
        encoded = encoded.replace(char, escaped)
    return encoded
