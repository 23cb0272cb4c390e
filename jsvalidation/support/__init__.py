"""
JsValidation Support Module
===========================

Validator facade and rule lists shared by the translation engine
and the remote validator.
"""

from jsvalidation.support.delegated_validator import DelegatedValidator, ValidationRuleParserProxy
from jsvalidation.support.rule_lists import (
    ASTERISK,
    CLIENT_RULES,
    DISABLE_JS_VALIDATION,
    FORM_REQUEST_RULE_NAME,
    NOOP_RULE,
    SERVER_RULES,
    is_form_request_rule,
    is_remote_rule,
    validation_disabled,
)

__all__ = [
    "DelegatedValidator",
    "ValidationRuleParserProxy",
    "ASTERISK",
    "CLIENT_RULES",
    "SERVER_RULES",
    "DISABLE_JS_VALIDATION",
    "NOOP_RULE",
    "FORM_REQUEST_RULE_NAME",
    "is_remote_rule",
    "is_form_request_rule",
    "validation_disabled",
]
