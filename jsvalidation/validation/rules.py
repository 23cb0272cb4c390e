"""
JsValidation Rule Objects
=========================

Rule objects usable next to rule strings.

Two kinds exist:
- Custom rules implementing `Rule`. They always run server-side, so
  the JavaScript validator checks them through a remote request.
- Stringable builders (`In`, `NotIn`, `Unique`, `Exists`, `RequiredIf`)
  that render to the equivalent rule string and behave exactly like it.

Example:
    rules = {
        "role": ["required", In(["admin", "editor"])],
        "email": ["required", "email", Unique("users", "email").ignore(5)],
        "code": [Uppercase()],
    }
"""

from __future__ import annotations

import inspect
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Optional, Union


class Rule(ABC):
    """
    Abstract custom validation rule.

    Implement `validate` to create custom rules. Override `validate_async`
    when the check needs I/O.

    Example:
        class Uppercase(Rule):
            message = "The :attribute must be uppercase."

            def validate(self, value: Any, field: str, data: dict) -> bool:
                return isinstance(value, str) and value.isupper()
    """

    message: str = "The :attribute is invalid."
    implicit: bool = False

    @abstractmethod
    def validate(self, value: Any, field: str, data: Dict[str, Any]) -> bool:
        """
        Validate the value.

        Args:
            value: Value to validate
            field: Attribute name
            data: Full data being validated

        Returns:
            True if valid, False otherwise
        """
        ...

    async def validate_async(self, value: Any, field: str, data: Dict[str, Any]) -> bool:
        """Validate asynchronously (defaults to `validate`)."""
        return self.validate(value, field, data)

    def get_message(self) -> str:
        """Get the unformatted error message."""
        return self.message

    @property
    def name(self) -> str:
        return type(self).__name__

    def __call__(self, value: Any, field: str, data: Dict[str, Any]) -> bool:
        """Allow rule to be called directly."""
        return self.validate(value, field, data)


class CallableRule(Rule):
    """
    Wrap a callable as a rule.

    The callable receives `(attribute, value, fail)` and reports a failure
    by calling `fail(message)`. It may be a coroutine function.

    Example:
        def no_admin(attribute, value, fail):
            if value == "admin":
                fail("The :attribute cannot be admin.")
    """

    def __init__(self, callback: Callable[..., Any]) -> None:
        self.callback = callback
        self.failed_message: Optional[str] = None

    def _fail(self, message: str) -> None:
        self.failed_message = message

    def validate(self, value: Any, field: str, data: Dict[str, Any]) -> bool:
        self.failed_message = None
        result = self.callback(field, value, self._fail)
        if inspect.isawaitable(result):
            # Coroutine callbacks only run through validate_async
            result.close()
            return True
        return self.failed_message is None

    async def validate_async(self, value: Any, field: str, data: Dict[str, Any]) -> bool:
        self.failed_message = None
        result = self.callback(field, value, self._fail)
        if inspect.isawaitable(result):
            await result
        return self.failed_message is None

    def get_message(self) -> str:
        return self.failed_message or self.message

    @property
    def name(self) -> str:
        return getattr(self.callback, "__name__", "Closure")


# =============================================================================
# Stringable Rule Builders
# =============================================================================

def _quote(value: Any) -> str:
    if isinstance(value, bool):
        value = "1" if value else "0"
    text = str(value).replace('"', '""')
    return f'"{text}"'


@dataclass
class In:
    """Value must be one of the given values."""

    values: Iterable[Any]

    def __str__(self) -> str:
        return "in:" + ",".join(_quote(v) for v in self.values)


@dataclass
class NotIn:
    """Value must not be one of the given values."""

    values: Iterable[Any]

    def __str__(self) -> str:
        return "not_in:" + ",".join(_quote(v) for v in self.values)


@dataclass
class RequiredIf:
    """Field is required when `other` equals one of `values`."""

    other: str
    values: List[Any] = field(default_factory=list)

    def __str__(self) -> str:
        values = [self.values] if not isinstance(self.values, (list, tuple)) else self.values
        return "required_if:" + ",".join([self.other, *(_quote(v) for v in values)])


@dataclass
class Exists:
    """
    Value must exist in a table.

    Checked by `Validator.passes_async()` through the presence verifier.
    """

    table: str
    column: str = "NULL"
    wheres: Dict[str, Any] = field(default_factory=dict)

    def where(self, column: str, value: Any) -> "Exists":
        self.wheres[column] = value
        return self

    def __str__(self) -> str:
        params = [self.table, self.column]
        for column, value in self.wheres.items():
            params.extend([column, _quote(value)])
        return "exists:" + ",".join(params)


@dataclass
class Unique:
    """
    Value must be unique in a table.

    Example:
        Unique("users", "email").ignore(user.id)
    """

    table: str
    column: str = "NULL"
    ignore_id: Optional[Any] = None
    id_column: str = "id"
    wheres: Dict[str, Any] = field(default_factory=dict)

    def ignore(self, id: Any, id_column: Optional[str] = None) -> "Unique":
        self.ignore_id = id
        self.id_column = id_column or self.id_column
        return self

    def where(self, column: str, value: Any) -> "Unique":
        self.wheres[column] = value
        return self

    def __str__(self) -> str:
        ignore = "NULL" if self.ignore_id is None else _quote(self.ignore_id)
        params = [self.table, self.column, ignore, self.id_column]
        for column, value in self.wheres.items():
            params.extend([column, _quote(value)])
        return "unique:" + ",".join(params)


STRINGABLE_RULES = (In, NotIn, RequiredIf, Exists, Unique)

RuleSpec = Union[str, Rule, In, NotIn, RequiredIf, Exists, Unique, Callable[..., Any], List[Any]]
