"""
JsValidation Helpers
====================

String and nested-data helpers shared by the validator and the
JavaScript rule translation.
"""

from __future__ import annotations

import fnmatch
import re
from datetime import date, datetime, timedelta
from typing import Any, Dict, Iterable, List, Optional, Union


_MISSING = object()


# =============================================================================
# String Helpers
# =============================================================================

def snake_case(text: str) -> str:
    """
    Convert text to snake_case.

    Example:
        >>> snake_case("RequiredWithoutAll")
        'required_without_all'
    """
    text = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1_\2", text)
    text = re.sub(r"([a-z\d])([A-Z])", r"\1_\2", text)
    text = re.sub(r"[-\s]+", "_", text)

    return text.lower()


def studly_case(text: str) -> str:
    """
    Convert text to StudlyCase, keeping existing inner capitals.

    Example:
        >>> studly_case("required_if")
        'RequiredIf'
        >>> studly_case("NoJsValidation")
        'NoJsValidation'
    """
    parts = re.split(r"[_\-\s]+", text)
    return "".join(p[:1].upper() + p[1:] for p in parts if p)


def str_is(pattern: str, value: str) -> bool:
    """
    Match value against a pattern where ``*`` matches anything.

    Example:
        >>> str_is("items.*.name", "items.0.name")
        True
    """
    if pattern == value:
        return True
    return fnmatch.fnmatchcase(value, pattern.replace("[", "[[]"))


# =============================================================================
# Nested Data Helpers
# =============================================================================

def get_nested(
    obj: Union[Dict, List, Any],
    path: str,
    default: Any = None,
    separator: str = ".",
) -> Any:
    """
    Get nested value from dict/list using dot notation.

    Example:
        >>> get_nested({"a": {"b": 1}}, "a.b")
        1
    """
    if isinstance(obj, dict) and path in obj:
        return obj[path]

    current = obj

    for key in path.split(separator):
        try:
            if isinstance(current, dict):
                current = current[key]
            elif isinstance(current, (list, tuple)) and key.isdigit():
                current = current[int(key)]
            else:
                return default
        except (KeyError, IndexError, TypeError):
            return default

    return current


def has_nested(obj: Union[Dict, List, Any], path: str) -> bool:
    """Check whether a dot-notation path exists in obj."""
    return get_nested(obj, path, _MISSING) is not _MISSING


def set_nested(
    obj: Dict,
    path: str,
    value: Any,
    separator: str = ".",
) -> Dict:
    """
    Set nested value in dict using dot notation.

    Example:
        >>> set_nested({}, "a.b.c", 1)
        {'a': {'b': {'c': 1}}}
    """
    keys = path.split(separator)
    current: Any = obj

    for key in keys[:-1]:
        if isinstance(current, list) and key.isdigit() and int(key) < len(current):
            if not isinstance(current[int(key)], (dict, list)):
                current[int(key)] = {}
            current = current[int(key)]
            continue
        if not isinstance(current.get(key), (dict, list)):
            current[key] = {}
        current = current[key]

    last = keys[-1]
    if isinstance(current, list) and last.isdigit() and int(last) < len(current):
        current[int(last)] = value
    else:
        current[last] = value
    return obj


def dot(obj: Any, prefix: str = "") -> Dict[str, Any]:
    """
    Flatten nested dicts/lists into a dot-notation dict.

    Empty containers are kept as leaf values.

    Example:
        >>> dot({"user": {"name": "x", "tags": ["a"]}})
        {'user.name': 'x', 'user.tags.0': 'a'}
    """
    result: Dict[str, Any] = {}

    if isinstance(obj, dict):
        items: Iterable = obj.items()
    elif isinstance(obj, (list, tuple)):
        items = enumerate(obj)
    else:
        return {prefix: obj} if prefix else {}

    for key, value in items:
        path = f"{prefix}{key}"
        if isinstance(value, (dict, list, tuple)) and value:
            result.update(dot(value, f"{path}."))
        else:
            result[path] = value

    return result


def html_name(attribute: str) -> str:
    """
    Convert a dotted attribute to its HTML form field name.

    Example:
        >>> html_name("user.address.city")
        'user[address][city]'
    """
    parts = attribute.split(".")
    if len(parts) > 1:
        return parts[0] + "[" + "][".join(parts[1:]) + "]"
    return attribute


def dotted_name(name: str) -> str:
    """
    Convert an HTML form field name back to its dotted attribute.

    Example:
        >>> dotted_name("user[address][city]")
        'user.address.city'
    """
    name = name.strip()
    if "[" not in name:
        return name

    head, _, rest = name.partition("[")
    keys = re.findall(r"([^\[\]]*)\]", "[" + rest)
    keys = [key for key in keys if key != ""]
    return ".".join([head, *keys])


# =============================================================================
# Value Helpers
# =============================================================================

_NUMERIC_PATTERN = re.compile(r"^\s*[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?\s*$")

_RELATIVE_DAYS = {"now": 0, "today": 0, "tomorrow": 1, "yesterday": -1}

_DATE_FORMATS = (
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M",
    "%Y/%m/%d",
    "%d-%m-%Y",
    "%m/%d/%Y",
    "%d %B %Y",
    "%B %d, %Y",
    "%d %b %Y",
)

# PHP date() format characters and their strptime directives
_PHP_DATE_DIRECTIVES = {
    "d": "%d", "j": "%d", "D": "%a", "l": "%A",
    "m": "%m", "n": "%m", "M": "%b", "F": "%B",
    "Y": "%Y", "y": "%y",
    "H": "%H", "G": "%H", "h": "%I", "g": "%I",
    "i": "%M", "s": "%S", "A": "%p", "a": "%p",
    "u": "%f", "v": "%f", "e": "%Z", "T": "%Z", "O": "%z", "P": "%z",
}


def is_numeric(value: Any) -> bool:
    """
    Check whether value is a number or a numeric string.

    Example:
        >>> is_numeric("1e3"), is_numeric(True)
        (True, False)
    """
    if isinstance(value, bool):
        return False
    if isinstance(value, (int, float)):
        return True
    return isinstance(value, str) and bool(_NUMERIC_PATTERN.match(value))


def to_number(value: Any) -> Union[int, float]:
    """Convert a numeric value to int when integral, float otherwise."""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value
    number = float(str(value).strip())
    return int(number) if number.is_integer() and "." not in str(value) else number


def parse_date(value: Any) -> Optional[datetime]:
    """
    Parse a date-like value into a naive local datetime.

    Accepts datetime/date objects, ISO 8601 strings, a handful of common
    formats and the keywords ``now``, ``today``, ``tomorrow``, ``yesterday``.
    Returns None when the value is not a date.
    """
    if isinstance(value, datetime):
        return _naive(value)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if not isinstance(value, str) or not value.strip():
        return None

    text = value.strip()
    keyword = text.lower()
    if keyword in _RELATIVE_DAYS:
        now = datetime.now()
        if keyword == "now":
            return now
        return datetime.combine(now.date() + timedelta(days=_RELATIVE_DAYS[keyword]), datetime.min.time())

    try:
        return _naive(datetime.fromisoformat(text))
    except ValueError:
        pass

    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue

    return None


def parse_date_format(value: Any, php_format: str) -> Optional[datetime]:
    """
    Parse value using a PHP-style date format (``Y-m-d H:i``).

    Example:
        >>> parse_date_format("2024-02-01", "Y-m-d")
        datetime.datetime(2024, 2, 1, 0, 0)
    """
    if not isinstance(value, str):
        return None

    directives = []
    escaped = False
    for char in php_format:
        if escaped:
            directives.append(char.replace("%", "%%"))
            escaped = False
        elif char == "\\":
            escaped = True
        elif char in _PHP_DATE_DIRECTIVES:
            directives.append(_PHP_DATE_DIRECTIVES[char])
        else:
            directives.append(char.replace("%", "%%"))

    try:
        return _naive(datetime.strptime(value, "".join(directives)))
    except ValueError:
        return None


def _naive(value: datetime) -> datetime:
    if value.tzinfo is not None:
        return value.astimezone().replace(tzinfo=None)
    return value
