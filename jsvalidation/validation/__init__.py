"""
JsValidation Validation System
==============================

Server-side validation for rule strings.

Features:
- Pipe-separated rule strings with wildcard attributes
- Custom rules, rule objects and callables
- Localised messages with placeholders
- Async presence rules (unique, exists)
- Form requests
"""

from jsvalidation.validation.factory import (
    Factory,
    get_validation_factory,
    set_validation_factory,
)
from jsvalidation.validation.form import AuthorizationError, FormRequest
from jsvalidation.validation.messages import DEFAULT_LINES, MessageBag, Translator
from jsvalidation.validation.parser import (
    InvalidRuleError,
    ParsedRules,
    ValidationRuleParser,
)
from jsvalidation.validation.presence import (
    DatabasePresenceVerifier,
    InMemoryPresenceVerifier,
    PresenceVerifier,
)
from jsvalidation.validation.rules import (
    CallableRule,
    Exists,
    In,
    NotIn,
    RequiredIf,
    Rule,
    Unique,
)
from jsvalidation.validation.validator import ValidationError, Validator

__all__ = [
    # Core
    "Validator",
    "ValidationError",
    "Factory",
    "get_validation_factory",
    "set_validation_factory",
    "ValidationRuleParser",
    "ParsedRules",
    "InvalidRuleError",
    # Messages
    "MessageBag",
    "Translator",
    "DEFAULT_LINES",
    # Rules
    "Rule",
    "CallableRule",
    "In",
    "NotIn",
    "RequiredIf",
    "Exists",
    "Unique",
    # Presence
    "PresenceVerifier",
    "DatabasePresenceVerifier",
    "InMemoryPresenceVerifier",
    # Forms
    "FormRequest",
    "AuthorizationError",
]
