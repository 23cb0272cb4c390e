"""
JsValidation Messages
=====================

Default English validation lines, a locale-aware translator and the
message bag collecting failures.

Lines use `:placeholder` replacements. Size rules have one line per
attribute type (numeric, file, string, array).
"""

from __future__ import annotations

from typing import Any, Dict, Iterator, List, Optional


DEFAULT_LINES: Dict[str, Any] = {
    "accepted": "The :attribute must be accepted.",
    "active_url": "The :attribute is not a valid URL.",
    "after": "The :attribute must be a date after :date.",
    "after_or_equal": "The :attribute must be a date after or equal to :date.",
    "alpha": "The :attribute must only contain letters.",
    "alpha_dash": "The :attribute must only contain letters, numbers, dashes and underscores.",
    "alpha_num": "The :attribute must only contain letters and numbers.",
    "array": "The :attribute must be an array.",
    "before": "The :attribute must be a date before :date.",
    "before_or_equal": "The :attribute must be a date before or equal to :date.",
    "between": {
        "numeric": "The :attribute must be between :min and :max.",
        "file": "The :attribute must be between :min and :max kilobytes.",
        "string": "The :attribute must be between :min and :max characters.",
        "array": "The :attribute must have between :min and :max items.",
    },
    "boolean": "The :attribute field must be true or false.",
    "confirmed": "The :attribute confirmation does not match.",
    "date": "The :attribute is not a valid date.",
    "date_equals": "The :attribute must be a date equal to :date.",
    "date_format": "The :attribute does not match the format :format.",
    "different": "The :attribute and :other must be different.",
    "digits": "The :attribute must be :digits digits.",
    "digits_between": "The :attribute must be between :min and :max digits.",
    "distinct": "The :attribute field has a duplicate value.",
    "email": "The :attribute must be a valid email address.",
    "exists": "The selected :attribute is invalid.",
    "file": "The :attribute must be a file.",
    "filled": "The :attribute field must have a value.",
    "gt": {
        "numeric": "The :attribute must be greater than :value.",
        "file": "The :attribute must be greater than :value kilobytes.",
        "string": "The :attribute must be greater than :value characters.",
        "array": "The :attribute must have more than :value items.",
    },
    "gte": {
        "numeric": "The :attribute must be greater than or equal to :value.",
        "file": "The :attribute must be greater than or equal to :value kilobytes.",
        "string": "The :attribute must be greater than or equal to :value characters.",
        "array": "The :attribute must have :value items or more.",
    },
    "image": "The :attribute must be an image.",
    "in": "The selected :attribute is invalid.",
    "in_array": "The :attribute field does not exist in :other.",
    "integer": "The :attribute must be an integer.",
    "ip": "The :attribute must be a valid IP address.",
    "ipv4": "The :attribute must be a valid IPv4 address.",
    "ipv6": "The :attribute must be a valid IPv6 address.",
    "json": "The :attribute must be a valid JSON string.",
    "lt": {
        "numeric": "The :attribute must be less than :value.",
        "file": "The :attribute must be less than :value kilobytes.",
        "string": "The :attribute must be less than :value characters.",
        "array": "The :attribute must have less than :value items.",
    },
    "lte": {
        "numeric": "The :attribute must be less than or equal to :value.",
        "file": "The :attribute must be less than or equal to :value kilobytes.",
        "string": "The :attribute must be less than or equal to :value characters.",
        "array": "The :attribute must not have more than :value items.",
    },
    "max": {
        "numeric": "The :attribute must not be greater than :max.",
        "file": "The :attribute must not be greater than :max kilobytes.",
        "string": "The :attribute must not be greater than :max characters.",
        "array": "The :attribute must not have more than :max items.",
    },
    "mimes": "The :attribute must be a file of type: :values.",
    "mimetypes": "The :attribute must be a file of type: :values.",
    "min": {
        "numeric": "The :attribute must be at least :min.",
        "file": "The :attribute must be at least :min kilobytes.",
        "string": "The :attribute must be at least :min characters.",
        "array": "The :attribute must have at least :min items.",
    },
    "not_in": "The selected :attribute is invalid.",
    "not_regex": "The :attribute format is invalid.",
    "numeric": "The :attribute must be a number.",
    "present": "The :attribute field must be present.",
    "regex": "The :attribute format is invalid.",
    "required": "The :attribute field is required.",
    "required_if": "The :attribute field is required when :other is :value.",
    "required_unless": "The :attribute field is required unless :other is in :values.",
    "required_with": "The :attribute field is required when :values is present.",
    "required_with_all": "The :attribute field is required when :values are present.",
    "required_without": "The :attribute field is required when :values is not present.",
    "required_without_all": "The :attribute field is required when none of :values are present.",
    "same": "The :attribute and :other must match.",
    "size": {
        "numeric": "The :attribute must be :size.",
        "file": "The :attribute must be :size kilobytes.",
        "string": "The :attribute must be :size characters.",
        "array": "The :attribute must contain :size items.",
    },
    "string": "The :attribute must be a string.",
    "timezone": "The :attribute must be a valid timezone.",
    "unique": "The :attribute has already been taken.",
    "uploaded": "The :attribute failed to upload.",
    "url": "The :attribute must be a valid URL.",
    "uuid": "The :attribute must be a valid UUID.",
    # Custom attribute display names
    "attributes": {},
    # Custom per-attribute lines: {"email": {"unique": "..."}}
    "custom": {},
    # Display names of values: {"type": {"1": "personal"}}
    "values": {},
}


class Translator:
    """
    Locale-keyed validation lines with a fallback locale.

    Keys use dot notation relative to the validation group:
    `max.string`, `custom.email.unique`, `attributes.email`.

    Example:
        translator = Translator()
        translator.add_lines("es", {"required": "El campo :attribute es obligatorio."})
        translator.locale = "es"
        translator.get("required")
    """

    def __init__(
        self,
        locale: str = "en",
        fallback_locale: str = "en",
        lines: Optional[Dict[str, Dict[str, Any]]] = None,
    ) -> None:
        self.locale = locale
        self.fallback_locale = fallback_locale
        self._lines: Dict[str, Dict[str, Any]] = {"en": _copy_lines(DEFAULT_LINES)}
        for loc, loc_lines in (lines or {}).items():
            self.add_lines(loc, loc_lines)

    def add_lines(self, locale: str, lines: Dict[str, Any]) -> None:
        """Merge lines into a locale (nested dicts are merged)."""
        target = self._lines.setdefault(locale, {})
        _merge(target, lines)

    def get(self, key: str, locale: Optional[str] = None) -> Optional[Any]:
        """Get a line, or None when neither locale defines it."""
        for loc in (locale or self.locale, self.fallback_locale):
            value = self._lookup(self._lines.get(loc, {}), key)
            if value is not None:
                return value
        return None

    def has(self, key: str, locale: Optional[str] = None) -> bool:
        return self.get(key, locale) is not None

    @staticmethod
    def _lookup(lines: Dict[str, Any], key: str) -> Optional[Any]:
        current: Any = lines
        for part in key.split("."):
            if not isinstance(current, dict) or part not in current:
                return None
            current = current[part]
        return current


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> None:
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _merge(base[key], value)
        else:
            base[key] = value


def _copy_lines(lines: Dict[str, Any]) -> Dict[str, Any]:
    return {k: _copy_lines(v) if isinstance(v, dict) else v for k, v in lines.items()}


class MessageBag:
    """
    Failure messages keyed by attribute.

    Example:
        bag = MessageBag()
        bag.add("email", "The email field is required.")
        bag.first("email")
        bag.messages()       # {"email": ["The email field is required."]}
    """

    def __init__(self, messages: Optional[Dict[str, List[str]]] = None) -> None:
        self._messages: Dict[str, List[str]] = {}
        for key, values in (messages or {}).items():
            for value in values:
                self.add(key, value)

    def add(self, key: str, message: str) -> "MessageBag":
        """Add a message, ignoring exact duplicates for the key."""
        bucket = self._messages.setdefault(key, [])
        if message not in bucket:
            bucket.append(message)
        return self

    def has(self, key: Optional[str] = None) -> bool:
        if key is None:
            return bool(self._messages)
        return bool(self._messages.get(key))

    def get(self, key: str) -> List[str]:
        return list(self._messages.get(key, []))

    def first(self, key: Optional[str] = None) -> Optional[str]:
        if key is not None:
            messages = self._messages.get(key, [])
            return messages[0] if messages else None
        for messages in self._messages.values():
            if messages:
                return messages[0]
        return None

    def all(self) -> List[str]:
        return [message for messages in self._messages.values() for message in messages]

    def keys(self) -> List[str]:
        return list(self._messages.keys())

    def messages(self) -> Dict[str, List[str]]:
        return {key: list(values) for key, values in self._messages.items()}

    def is_empty(self) -> bool:
        return not self._messages

    def __bool__(self) -> bool:
        return bool(self._messages)

    def __len__(self) -> int:
        return sum(len(messages) for messages in self._messages.values())

    def __iter__(self) -> Iterator[str]:
        return iter(self._messages)

    def __contains__(self, key: str) -> bool:
        return self.has(key)

    def __repr__(self) -> str:
        return f"<MessageBag {self._messages!r}>"
