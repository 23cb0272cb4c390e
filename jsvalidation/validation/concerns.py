"""
JsValidation Built-in Rules
===========================

Mixins holding the built-in rule checks and their message replacements.

A rule named `RequiredWith` is checked by `validate_required_with` and
its message placeholders are filled by `replace_required_with`. Checks
receive `(attribute, value, parameters)` and return a bool. Checks that
need I/O also provide a `validate_<name>_async` variant.
"""

from __future__ import annotations

import ipaddress
import operator
import re
import socket
from datetime import date, datetime
from functools import lru_cache
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional, Sequence
from urllib.parse import urlparse
from zoneinfo import available_timezones

import orjson

from jsvalidation.core.request import UploadedFile
from jsvalidation.utils.helpers import (
    _MISSING,
    get_nested,
    has_nested,
    is_numeric,
    parse_date,
    parse_date_format,
    to_number,
)
from jsvalidation.validation.parser import InvalidRuleError

if TYPE_CHECKING:
    from jsvalidation.validation.presence import PresenceVerifier


NUMERIC_RULES = ("Numeric", "Integer")

SIZE_RULES = ("Size", "Between", "Min", "Max", "Gt", "Lt", "Gte", "Lte")

FILE_RULES = ("File", "Image", "Mimes", "Mimetypes", "Between", "Max", "Min", "Size", "Gt", "Lt", "Gte", "Lte")

IMPLICIT_RULES = (
    "Accepted",
    "Filled",
    "Present",
    "Required",
    "RequiredIf",
    "RequiredUnless",
    "RequiredWith",
    "RequiredWithAll",
    "RequiredWithout",
    "RequiredWithoutAll",
)

DEPENDENT_RULES = (
    "After",
    "AfterOrEqual",
    "Before",
    "BeforeOrEqual",
    "Confirmed",
    "DateEquals",
    "Different",
    "Gt",
    "Gte",
    "Lt",
    "Lte",
    "RequiredIf",
    "RequiredUnless",
    "RequiredWith",
    "RequiredWithAll",
    "RequiredWithout",
    "RequiredWithoutAll",
    "Same",
)

_EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")

_URL_PATTERN = re.compile(
    r"^(?:https?|ftp)://"
    r"(?:[^\s:@/]+(?::[^\s:@/]*)?@)?"
    r"(?:(?:[A-Z0-9](?:[A-Z0-9-]{0,61}[A-Z0-9])?\.)+[A-Z]{2,63}\.?|"
    r"localhost|"
    r"\d{1,3}\.\d{1,3}\.\d{1,3}\.\d{1,3}|"
    r"\[[0-9A-F:.]+\])"
    r"(?::\d+)?"
    r"(?:/?|[/?#]\S+)$",
    re.IGNORECASE,
)

_UUID_PATTERN = re.compile(
    r"^[\da-f]{8}-[\da-f]{4}-[\da-f]{4}-[\da-f]{4}-[\da-f]{12}$",
    re.IGNORECASE,
)

_INTEGER_PATTERN = re.compile(r"^[+-]?\d+$")

_IMAGE_EXTENSIONS = ["jpg", "jpeg", "png", "gif", "bmp", "svg", "webp"]

_REGEX_FLAGS = {"i": re.IGNORECASE, "m": re.MULTILINE, "s": re.DOTALL, "x": re.VERBOSE}

_CLOSING_DELIMITERS = {"(": ")", "{": "}", "[": "]", "<": ">"}


@lru_cache(maxsize=1)
def _timezones() -> frozenset:
    return frozenset(available_timezones())


@lru_cache(maxsize=256)
def compile_pattern(pattern: str) -> "re.Pattern[str]":
    """
    Compile a delimited pattern (`/^[a-z]+$/i`) into a Python regex.

    Undelimited patterns are compiled as they are.
    """
    if len(pattern) >= 2 and not pattern[0].isalnum() and pattern[0] != "\\":
        closing = _CLOSING_DELIMITERS.get(pattern[0], pattern[0])
        end = pattern.rfind(closing)
        if end > 0:
            flags = 0
            for flag in pattern[end + 1:]:
                flags |= _REGEX_FLAGS.get(flag, 0)
            return re.compile(pattern[1:end], flags)
    return re.compile(pattern)


def _stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "1" if value else "0"
    return str(value)


def _loose_equals(value: Any, expected: Any) -> bool:
    if isinstance(value, bool) or isinstance(expected, bool) or value is None or expected is None:
        return value == expected
    return _stringify(value) == _stringify(expected)


class ValidatesAttributes:
    """Built-in rule checks, mixed into `Validator`."""

    data: Dict[str, Any]
    presence_verifier: Optional["PresenceVerifier"]

    # Provided by Validator
    get_value: Callable[[str], Any]
    has_rule: Callable[[str, Any], bool]
    get_rule: Callable[..., Any]
    implicit_attributes: Dict[str, List[str]]

    # =========================================================================
    # Presence
    # =========================================================================

    def validate_required(self, attribute: str, value: Any, parameters: List[str]) -> bool:
        if value is None:
            return False
        if isinstance(value, str) and value.strip() == "":
            return False
        if isinstance(value, (list, tuple, dict)) and len(value) == 0:
            return False
        if isinstance(value, UploadedFile):
            return bool(value.filename) and value.is_valid()
        return True

    def validate_filled(self, attribute: str, value: Any, parameters: List[str]) -> bool:
        if has_nested(self.data, attribute):
            return self.validate_required(attribute, value, parameters)
        return True

    def validate_present(self, attribute: str, value: Any, parameters: List[str]) -> bool:
        return has_nested(self.data, attribute)

    def validate_accepted(self, attribute: str, value: Any, parameters: List[str]) -> bool:
        acceptable = ("yes", "on", "1", 1, True, "true")
        return self.validate_required(attribute, value, parameters) and value in acceptable

    def validate_required_if(self, attribute: str, value: Any, parameters: List[str]) -> bool:
        self._require_parameter_count(2, parameters, "required_if")

        other = self.get_value(parameters[0])
        values = self._convert_values_to_type(other, parameters[1:])

        if any(_loose_equals(other, expected) for expected in values):
            return self.validate_required(attribute, value, parameters)
        return True

    def validate_required_unless(self, attribute: str, value: Any, parameters: List[str]) -> bool:
        self._require_parameter_count(2, parameters, "required_unless")

        other = self.get_value(parameters[0])
        values = self._convert_values_to_type(other, parameters[1:])

        if not any(_loose_equals(other, expected) for expected in values):
            return self.validate_required(attribute, value, parameters)
        return True

    def validate_required_with(self, attribute: str, value: Any, parameters: List[str]) -> bool:
        if not self._all_failing_required(parameters):
            return self.validate_required(attribute, value, parameters)
        return True

    def validate_required_with_all(self, attribute: str, value: Any, parameters: List[str]) -> bool:
        if not self._any_failing_required(parameters):
            return self.validate_required(attribute, value, parameters)
        return True

    def validate_required_without(self, attribute: str, value: Any, parameters: List[str]) -> bool:
        if self._any_failing_required(parameters):
            return self.validate_required(attribute, value, parameters)
        return True

    def validate_required_without_all(self, attribute: str, value: Any, parameters: List[str]) -> bool:
        if self._all_failing_required(parameters):
            return self.validate_required(attribute, value, parameters)
        return True

    def _any_failing_required(self, attributes: Sequence[str]) -> bool:
        return any(not self.validate_required(key, self.get_value(key), []) for key in attributes)

    def _all_failing_required(self, attributes: Sequence[str]) -> bool:
        return all(not self.validate_required(key, self.get_value(key), []) for key in attributes)

    @staticmethod
    def _convert_values_to_type(other: Any, values: List[str]) -> List[Any]:
        if isinstance(other, bool):
            return [{"true": True, "false": False}.get(v, v) for v in values]
        if other is None:
            return [None if v == "null" else v for v in values]
        return list(values)

    # =========================================================================
    # Markers
    # =========================================================================

    def validate_bail(self, attribute: str, value: Any, parameters: List[str]) -> bool:
        return True

    def validate_nullable(self, attribute: str, value: Any, parameters: List[str]) -> bool:
        return True

    def validate_sometimes(self, attribute: str, value: Any, parameters: List[str]) -> bool:
        return True

    def validate_proengsoft_noop(self, attribute: str, value: Any, parameters: List[str]) -> bool:
        return True

    def validate_no_js_validation(self, attribute: str, value: Any, parameters: List[str]) -> bool:
        return True

    def validate_proengsoft_form_request(self, attribute: str, value: Any, parameters: List[str]) -> bool:
        return True

    # =========================================================================
    # Types
    # =========================================================================

    def validate_string(self, attribute: str, value: Any, parameters: List[str]) -> bool:
        return isinstance(value, str)

    def validate_array(self, attribute: str, value: Any, parameters: List[str]) -> bool:
        return isinstance(value, (list, tuple, dict))

    def validate_boolean(self, attribute: str, value: Any, parameters: List[str]) -> bool:
        return value in (True, False, 0, 1, "0", "1") and not isinstance(value, float)

    def validate_numeric(self, attribute: str, value: Any, parameters: List[str]) -> bool:
        return is_numeric(value)

    def validate_integer(self, attribute: str, value: Any, parameters: List[str]) -> bool:
        if isinstance(value, bool):
            return False
        if isinstance(value, int):
            return True
        return isinstance(value, str) and bool(_INTEGER_PATTERN.match(value))

    def validate_json(self, attribute: str, value: Any, parameters: List[str]) -> bool:
        if not isinstance(value, str):
            return False
        try:
            orjson.loads(value)
        except orjson.JSONDecodeError:
            return False
        return True

    # =========================================================================
    # Strings
    # =========================================================================

    def validate_alpha(self, attribute: str, value: Any, parameters: List[str]) -> bool:
        return isinstance(value, str) and bool(re.fullmatch(r"[^\W\d_]+", value))

    def validate_alpha_num(self, attribute: str, value: Any, parameters: List[str]) -> bool:
        if not isinstance(value, (str, int)) or isinstance(value, bool):
            return False
        return bool(re.fullmatch(r"[^\W_]+", str(value)))

    def validate_alpha_dash(self, attribute: str, value: Any, parameters: List[str]) -> bool:
        if not isinstance(value, (str, int)) or isinstance(value, bool):
            return False
        return bool(re.fullmatch(r"[\w-]+", str(value)))

    def validate_email(self, attribute: str, value: Any, parameters: List[str]) -> bool:
        return isinstance(value, str) and bool(_EMAIL_PATTERN.match(value))

    def validate_url(self, attribute: str, value: Any, parameters: List[str]) -> bool:
        return isinstance(value, str) and bool(_URL_PATTERN.match(value))

    def validate_active_url(self, attribute: str, value: Any, parameters: List[str]) -> bool:
        if not isinstance(value, str):
            return False
        host = urlparse(value).hostname
        if not host:
            return False
        try:
            return bool(socket.getaddrinfo(host, None))
        except (socket.gaierror, UnicodeError):
            return False

    def validate_uuid(self, attribute: str, value: Any, parameters: List[str]) -> bool:
        return isinstance(value, str) and bool(_UUID_PATTERN.match(value))

    def validate_ip(self, attribute: str, value: Any, parameters: List[str]) -> bool:
        return self._ip_version(value) is not None

    def validate_ipv4(self, attribute: str, value: Any, parameters: List[str]) -> bool:
        return self._ip_version(value) == 4

    def validate_ipv6(self, attribute: str, value: Any, parameters: List[str]) -> bool:
        return self._ip_version(value) == 6

    @staticmethod
    def _ip_version(value: Any) -> Optional[int]:
        try:
            return ipaddress.ip_address(str(value)).version
        except ValueError:
            return None

    def validate_timezone(self, attribute: str, value: Any, parameters: List[str]) -> bool:
        return isinstance(value, str) and value in _timezones()

    def validate_regex(self, attribute: str, value: Any, parameters: List[str]) -> bool:
        if not isinstance(value, (str, int, float)) or isinstance(value, bool):
            return False
        self._require_parameter_count(1, parameters, "regex")
        return compile_pattern(parameters[0]).search(str(value)) is not None

    def validate_not_regex(self, attribute: str, value: Any, parameters: List[str]) -> bool:
        if not isinstance(value, (str, int, float)) or isinstance(value, bool):
            return False
        self._require_parameter_count(1, parameters, "not_regex")
        return compile_pattern(parameters[0]).search(str(value)) is None

    def validate_digits(self, attribute: str, value: Any, parameters: List[str]) -> bool:
        self._require_parameter_count(1, parameters, "digits")
        text = _stringify(value)
        return text.isdigit() and len(text) == int(parameters[0])

    def validate_digits_between(self, attribute: str, value: Any, parameters: List[str]) -> bool:
        self._require_parameter_count(2, parameters, "digits_between")
        text = _stringify(value)
        return text.isdigit() and int(parameters[0]) <= len(text) <= int(parameters[1])

    # =========================================================================
    # Comparison
    # =========================================================================

    def validate_in(self, attribute: str, value: Any, parameters: List[str]) -> bool:
        if isinstance(value, (list, tuple)) and self.has_rule(attribute, "Array"):
            return all(_stringify(item) in parameters for item in value)
        if isinstance(value, (list, tuple, dict)):
            return False
        return _stringify(value) in parameters

    def validate_not_in(self, attribute: str, value: Any, parameters: List[str]) -> bool:
        if isinstance(value, (list, tuple)) and self.has_rule(attribute, "Array"):
            return not any(_stringify(item) in parameters for item in value)
        return not self.validate_in(attribute, value, parameters)

    def validate_confirmed(self, attribute: str, value: Any, parameters: List[str]) -> bool:
        return self.validate_same(attribute, value, [f"{attribute}_confirmation"])

    def validate_same(self, attribute: str, value: Any, parameters: List[str]) -> bool:
        self._require_parameter_count(1, parameters, "same")
        other = get_nested(self.data, parameters[0], _MISSING)
        return other is not _MISSING and value == other

    def validate_different(self, attribute: str, value: Any, parameters: List[str]) -> bool:
        self._require_parameter_count(1, parameters, "different")
        for parameter in parameters:
            other = get_nested(self.data, parameter, _MISSING)
            if other is not _MISSING and value == other:
                return False
        return True

    # =========================================================================
    # Sizes
    # =========================================================================

    def get_size(self, attribute: str, value: Any) -> float:
        """
        Size of a value: the number itself for numeric attributes, item
        count for arrays, kilobytes for files, characters otherwise.
        """
        if is_numeric(value) and self.has_rule(attribute, NUMERIC_RULES):
            return to_number(value)
        if isinstance(value, (list, tuple, dict)):
            return len(value)
        if isinstance(value, UploadedFile):
            return value.kilobytes
        if value is None:
            return 0
        return len(_stringify(value))

    def validate_size(self, attribute: str, value: Any, parameters: List[str]) -> bool:
        self._require_parameter_count(1, parameters, "size")
        return self.get_size(attribute, value) == to_number(parameters[0])

    def validate_between(self, attribute: str, value: Any, parameters: List[str]) -> bool:
        self._require_parameter_count(2, parameters, "between")
        size = self.get_size(attribute, value)
        return to_number(parameters[0]) <= size <= to_number(parameters[1])

    def validate_min(self, attribute: str, value: Any, parameters: List[str]) -> bool:
        self._require_parameter_count(1, parameters, "min")
        return self.get_size(attribute, value) >= to_number(parameters[0])

    def validate_max(self, attribute: str, value: Any, parameters: List[str]) -> bool:
        self._require_parameter_count(1, parameters, "max")
        if isinstance(value, UploadedFile) and not value.is_valid():
            return False
        return self.get_size(attribute, value) <= to_number(parameters[0])

    def validate_gt(self, attribute: str, value: Any, parameters: List[str]) -> bool:
        return self._compare_size(attribute, value, parameters, operator.gt, "gt")

    def validate_gte(self, attribute: str, value: Any, parameters: List[str]) -> bool:
        return self._compare_size(attribute, value, parameters, operator.ge, "gte")

    def validate_lt(self, attribute: str, value: Any, parameters: List[str]) -> bool:
        return self._compare_size(attribute, value, parameters, operator.lt, "lt")

    def validate_lte(self, attribute: str, value: Any, parameters: List[str]) -> bool:
        return self._compare_size(attribute, value, parameters, operator.le, "lte")

    def _compare_size(
        self,
        attribute: str,
        value: Any,
        parameters: List[str],
        compare: Callable[[Any, Any], bool],
        rule: str,
    ) -> bool:
        self._require_parameter_count(1, parameters, rule)
        other = self.get_value(parameters[0])

        if other is None:
            if not is_numeric(parameters[0]):
                return False
            return compare(self.get_size(attribute, value), to_number(parameters[0]))

        if self.has_rule(attribute, NUMERIC_RULES) and is_numeric(value) and is_numeric(other):
            return compare(to_number(value), to_number(other))

        if not self._is_same_type(value, other):
            return False

        return compare(self.get_size(attribute, value), self.get_size(attribute, other))

    @staticmethod
    def _is_same_type(first: Any, second: Any) -> bool:
        groups = ((list, tuple, dict), (str,), (UploadedFile,), (int, float))
        for group in groups:
            if isinstance(first, group):
                return isinstance(second, group)
        return type(first) is type(second)

    # =========================================================================
    # Dates
    # =========================================================================

    def validate_date(self, attribute: str, value: Any, parameters: List[str]) -> bool:
        if isinstance(value, (datetime, date)):
            return True
        return isinstance(value, str) and parse_date(value) is not None

    def validate_date_format(self, attribute: str, value: Any, parameters: List[str]) -> bool:
        self._require_parameter_count(1, parameters, "date_format")
        return parse_date_format(value, parameters[0]) is not None

    def validate_after(self, attribute: str, value: Any, parameters: List[str]) -> bool:
        return self._compare_dates(attribute, value, parameters, operator.gt, "after")

    def validate_after_or_equal(self, attribute: str, value: Any, parameters: List[str]) -> bool:
        return self._compare_dates(attribute, value, parameters, operator.ge, "after_or_equal")

    def validate_before(self, attribute: str, value: Any, parameters: List[str]) -> bool:
        return self._compare_dates(attribute, value, parameters, operator.lt, "before")

    def validate_before_or_equal(self, attribute: str, value: Any, parameters: List[str]) -> bool:
        return self._compare_dates(attribute, value, parameters, operator.le, "before_or_equal")

    def validate_date_equals(self, attribute: str, value: Any, parameters: List[str]) -> bool:
        return self._compare_dates(attribute, value, parameters, operator.eq, "date_equals")

    def _compare_dates(
        self,
        attribute: str,
        value: Any,
        parameters: List[str],
        compare: Callable[[Any, Any], bool],
        rule: str,
    ) -> bool:
        self._require_parameter_count(1, parameters, rule)

        if not isinstance(value, (str, datetime, date)):
            return False

        format_rule = self.get_rule(attribute, "DateFormat")
        if format_rule is not None:
            date_format = format_rule[1][0]
            first = parse_date_format(value, date_format) if isinstance(value, str) else parse_date(value)
            second = parse_date_format(parameters[0], date_format)
            if second is None:
                second = parse_date_format(self.get_value(parameters[0]), date_format)
        else:
            first = parse_date(value)
            second = parse_date(parameters[0])
            if second is None:
                second = parse_date(self.get_value(parameters[0]))

        if first is None or second is None:
            return False
        return compare(first, second)

    # =========================================================================
    # Files
    # =========================================================================

    def validate_file(self, attribute: str, value: Any, parameters: List[str]) -> bool:
        return isinstance(value, UploadedFile) and value.is_valid()

    def validate_image(self, attribute: str, value: Any, parameters: List[str]) -> bool:
        return self.validate_mimes(attribute, value, _IMAGE_EXTENSIONS)

    def validate_mimes(self, attribute: str, value: Any, parameters: List[str]) -> bool:
        if not self.validate_file(attribute, value, parameters):
            return False

        allowed = {p.lower() for p in parameters}
        if allowed & {"jpg", "jpeg"}:
            allowed |= {"jpg", "jpeg"}

        return value.guess_extension() in allowed or value.extension in allowed

    def validate_mimetypes(self, attribute: str, value: Any, parameters: List[str]) -> bool:
        if not self.validate_file(attribute, value, parameters):
            return False

        content_type = value.content_type
        return content_type in parameters or content_type.split("/")[0] + "/*" in parameters

    # =========================================================================
    # Database presence
    # =========================================================================

    def validate_unique(self, attribute: str, value: Any, parameters: List[str]) -> bool:
        """Checked by `validate_unique_async`."""
        return True

    def validate_exists(self, attribute: str, value: Any, parameters: List[str]) -> bool:
        """Checked by `validate_exists_async`."""
        return True

    async def validate_unique_async(self, attribute: str, value: Any, parameters: List[str]) -> bool:
        self._require_parameter_count(1, parameters, "unique")

        table, column = self._parse_table(attribute, parameters)
        ignore_id = None
        if len(parameters) > 2 and parameters[2] not in ("", "NULL"):
            ignore_id = parameters[2]
        id_column = parameters[3] if len(parameters) > 3 and parameters[3] != "NULL" else "id"
        extra = self._extra_conditions(parameters[4:])

        count = await self._get_presence_verifier().get_count(
            table, column, value, ignore_id, id_column, extra
        )
        return count == 0

    async def validate_exists_async(self, attribute: str, value: Any, parameters: List[str]) -> bool:
        self._require_parameter_count(1, parameters, "exists")

        table, column = self._parse_table(attribute, parameters)
        extra = self._extra_conditions(parameters[2:])
        verifier = self._get_presence_verifier()

        if isinstance(value, (list, tuple)):
            values = list(dict.fromkeys(value))
            return await verifier.get_multi_count(table, column, values, extra) >= len(values)

        return await verifier.get_count(table, column, value, None, None, extra) >= 1

    def _parse_table(self, attribute: str, parameters: List[str]) -> tuple:
        column = parameters[1] if len(parameters) > 1 and parameters[1] != "NULL" else None
        if column is None:
            column = attribute.split(".")[-1] if self._is_implicit_attribute(attribute) else attribute
        return parameters[0], column

    def _is_implicit_attribute(self, attribute: str) -> bool:
        return any(attribute in keys for keys in self.implicit_attributes.values())

    @staticmethod
    def _extra_conditions(segments: List[str]) -> Dict[str, str]:
        return {segments[i]: segments[i + 1] for i in range(0, len(segments) - 1, 2)}

    def _get_presence_verifier(self) -> "PresenceVerifier":
        if self.presence_verifier is None:
            raise RuntimeError("Presence verifier has not been set.")
        return self.presence_verifier

    # =========================================================================
    # Utilities
    # =========================================================================

    @staticmethod
    def _require_parameter_count(count: int, parameters: List[str], rule: str) -> None:
        if len(parameters) < count:
            raise InvalidRuleError(f"Validation rule {rule} requires at least {count} parameters.")


class ReplacesAttributes:
    """Rule-specific message placeholder replacements, mixed into `Validator`."""

    get_display_name: Callable[[str], str]
    get_displayable_value: Callable[[str, Any], str]
    get_value: Callable[[str], Any]
    get_size: Callable[[str, Any], float]

    def replace_between(self, message: str, attribute: str, rule: str, parameters: List[str]) -> str:
        return message.replace(":min", parameters[0]).replace(":max", parameters[1])

    def replace_digits_between(self, message: str, attribute: str, rule: str, parameters: List[str]) -> str:
        return self.replace_between(message, attribute, rule, parameters)

    def replace_digits(self, message: str, attribute: str, rule: str, parameters: List[str]) -> str:
        return message.replace(":digits", parameters[0])

    def replace_min(self, message: str, attribute: str, rule: str, parameters: List[str]) -> str:
        return message.replace(":min", parameters[0])

    def replace_max(self, message: str, attribute: str, rule: str, parameters: List[str]) -> str:
        return message.replace(":max", parameters[0])

    def replace_size(self, message: str, attribute: str, rule: str, parameters: List[str]) -> str:
        return message.replace(":size", parameters[0])

    def replace_in(self, message: str, attribute: str, rule: str, parameters: List[str]) -> str:
        values = [self.get_displayable_value(attribute, p) for p in parameters]
        return message.replace(":values", ", ".join(values))

    def replace_not_in(self, message: str, attribute: str, rule: str, parameters: List[str]) -> str:
        return self.replace_in(message, attribute, rule, parameters)

    def replace_mimes(self, message: str, attribute: str, rule: str, parameters: List[str]) -> str:
        return message.replace(":values", ", ".join(parameters))

    def replace_mimetypes(self, message: str, attribute: str, rule: str, parameters: List[str]) -> str:
        return self.replace_mimes(message, attribute, rule, parameters)

    def replace_date_format(self, message: str, attribute: str, rule: str, parameters: List[str]) -> str:
        return message.replace(":format", parameters[0])

    def replace_same(self, message: str, attribute: str, rule: str, parameters: List[str]) -> str:
        return message.replace(":other", self.get_display_name(parameters[0]))

    def replace_different(self, message: str, attribute: str, rule: str, parameters: List[str]) -> str:
        return self.replace_same(message, attribute, rule, parameters)

    def replace_required_with(self, message: str, attribute: str, rule: str, parameters: List[str]) -> str:
        names = [self.get_display_name(p) for p in parameters]
        return message.replace(":values", " / ".join(names))

    def replace_required_with_all(self, message: str, attribute: str, rule: str, parameters: List[str]) -> str:
        return self.replace_required_with(message, attribute, rule, parameters)

    def replace_required_without(self, message: str, attribute: str, rule: str, parameters: List[str]) -> str:
        return self.replace_required_with(message, attribute, rule, parameters)

    def replace_required_without_all(self, message: str, attribute: str, rule: str, parameters: List[str]) -> str:
        return self.replace_required_with(message, attribute, rule, parameters)

    def replace_required_if(self, message: str, attribute: str, rule: str, parameters: List[str]) -> str:
        value = self.get_displayable_value(parameters[0], self.get_value(parameters[0]))
        message = message.replace(":value", value)
        return message.replace(":other", self.get_display_name(parameters[0]))

    def replace_required_unless(self, message: str, attribute: str, rule: str, parameters: List[str]) -> str:
        values = [self.get_displayable_value(parameters[0], p) for p in parameters[1:]]
        message = message.replace(":values", ", ".join(values))
        return message.replace(":other", self.get_display_name(parameters[0]))

    def replace_gt(self, message: str, attribute: str, rule: str, parameters: List[str]) -> str:
        other = self.get_value(parameters[0])
        if other is None:
            return message.replace(":value", parameters[0])
        return message.replace(":value", _format_size(self.get_size(attribute, other)))

    def replace_gte(self, message: str, attribute: str, rule: str, parameters: List[str]) -> str:
        return self.replace_gt(message, attribute, rule, parameters)

    def replace_lt(self, message: str, attribute: str, rule: str, parameters: List[str]) -> str:
        return self.replace_gt(message, attribute, rule, parameters)

    def replace_lte(self, message: str, attribute: str, rule: str, parameters: List[str]) -> str:
        return self.replace_gt(message, attribute, rule, parameters)

    def replace_after(self, message: str, attribute: str, rule: str, parameters: List[str]) -> str:
        if parse_date(parameters[0]) is None:
            return message.replace(":date", self.get_display_name(parameters[0]))
        return message.replace(":date", self.get_displayable_value(attribute, parameters[0]))

    def replace_after_or_equal(self, message: str, attribute: str, rule: str, parameters: List[str]) -> str:
        return self.replace_after(message, attribute, rule, parameters)

    def replace_before(self, message: str, attribute: str, rule: str, parameters: List[str]) -> str:
        return self.replace_after(message, attribute, rule, parameters)

    def replace_before_or_equal(self, message: str, attribute: str, rule: str, parameters: List[str]) -> str:
        return self.replace_after(message, attribute, rule, parameters)

    def replace_date_equals(self, message: str, attribute: str, rule: str, parameters: List[str]) -> str:
        return self.replace_after(message, attribute, rule, parameters)


def _format_size(size: float) -> str:
    if isinstance(size, float) and size.is_integer():
        size = int(size)
    return str(size)
