"""
JsValidation Validator Factory
==============================

Creates validators and holds custom rule registrations.

Example:
    factory = Factory()
    factory.extend(
        "even",
        lambda attribute, value, parameters, validator: int(value) % 2 == 0,
        "The :attribute must be even.",
    )
    validator = factory.make({"count": 3}, {"count": "required|even"})
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Optional

from jsvalidation.utils.helpers import snake_case
from jsvalidation.validation.messages import Translator
from jsvalidation.validation.presence import PresenceVerifier
from jsvalidation.validation.validator import Extension, Replacer, Validator


# Resolver signature: (translator, data, rules, messages, attributes) -> Validator
Resolver = Callable[
    [Translator, Dict[str, Any], Dict[str, Any], Dict[str, Any], Dict[str, str]],
    Validator,
]


class Factory:
    """Validator factory and custom rule registry."""

    def __init__(
        self,
        translator: Optional[Translator] = None,
        presence_verifier: Optional[PresenceVerifier] = None,
    ) -> None:
        self.translator = translator or Translator()
        self.presence_verifier = presence_verifier
        self.extensions: Dict[str, Extension] = {}
        self.implicit_extensions: Dict[str, Extension] = {}
        self.replacers: Dict[str, Replacer] = {}
        self.fallback_messages: Dict[str, str] = {}
        self._resolver: Optional[Resolver] = None

    def make(
        self,
        data: Dict[str, Any],
        rules: Dict[str, Any],
        messages: Optional[Dict[str, Any]] = None,
        attributes: Optional[Dict[str, str]] = None,
    ) -> Validator:
        """Create a validator with the registered extensions applied."""
        validator = self._resolve(data, rules, messages or {}, attributes or {})

        if self.presence_verifier is not None:
            validator.presence_verifier = self.presence_verifier

        validator.add_extensions(self.extensions)
        validator.add_implicit_extensions(self.implicit_extensions)
        validator.add_replacers(self.replacers)
        validator.set_fallback_messages(self.fallback_messages)

        return validator

    def _resolve(
        self,
        data: Dict[str, Any],
        rules: Dict[str, Any],
        messages: Dict[str, Any],
        attributes: Dict[str, str],
    ) -> Validator:
        if self._resolver is None:
            return Validator(data, rules, messages, attributes, translator=self.translator)
        return self._resolver(self.translator, data, rules, messages, attributes)

    def extend(self, rule: str, extension: Extension, message: Optional[str] = None) -> None:
        """Register a custom rule."""
        self.extensions[rule] = extension
        if message:
            self.fallback_messages[snake_case(rule)] = message

    def extend_implicit(self, rule: str, extension: Extension, message: Optional[str] = None) -> None:
        """Register a custom rule that also runs on empty values."""
        self.implicit_extensions[rule] = extension
        if message:
            self.fallback_messages[snake_case(rule)] = message

    def replacer(self, rule: str, replacer: Replacer) -> None:
        """Register a message placeholder replacer for a custom rule."""
        self.replacers[rule] = replacer

    def resolver(self, resolver: Resolver) -> None:
        """Replace how validator instances are constructed."""
        self._resolver = resolver

    def copy(self) -> "Factory":
        """Independent factory with the same registrations."""
        clone = Factory(self.translator, self.presence_verifier)
        clone.extensions = dict(self.extensions)
        clone.implicit_extensions = dict(self.implicit_extensions)
        clone.replacers = dict(self.replacers)
        clone.fallback_messages = dict(self.fallback_messages)
        clone._resolver = self._resolver
        return clone


# =============================================================================
# Default Factory
# =============================================================================

# request.state key holding a request-scoped factory
STATE_KEY = "validation_factory"

_default_factory: Optional[Factory] = None


def get_validation_factory(request: Optional[Any] = None) -> Factory:
    """
    Factory for the current request.

    Returns the request-scoped factory installed by middleware when
    present, else the process-wide default.
    """
    if request is not None:
        scoped = request.state.get(STATE_KEY)
        if scoped is not None:
            return scoped

    global _default_factory
    if _default_factory is None:
        _default_factory = Factory()
    return _default_factory


def set_validation_factory(factory: Optional[Factory]) -> None:
    """Replace the process-wide default factory (None resets it)."""
    global _default_factory
    _default_factory = factory
