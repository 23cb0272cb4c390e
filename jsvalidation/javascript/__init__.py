"""
JsValidation JavaScript Module
==============================

Translation of server rules into the client plugin's rule map.

Components:
- RuleParser: client or remote method and parameters for each rule
- MessageParser: error messages rendered as the server would
- ValidatorHandler: the `{"rules": ..., "messages": []}` map
- JavascriptValidator: rendering and fluent configuration
"""

from jsvalidation.javascript.client_rules import JAVASCRIPT_VALIDATION_RULE, ClientRulesMixin
from jsvalidation.javascript.javascript_validator import JavascriptValidator, PropertyNotFoundError
from jsvalidation.javascript.message_parser import MessageParser
from jsvalidation.javascript.rule_parser import FORM_REQUEST_RULE, REMOTE_RULE, RuleParser
from jsvalidation.javascript.validator_handler import ValidatorHandler

__all__ = [
    "RuleParser",
    "ClientRulesMixin",
    "MessageParser",
    "ValidatorHandler",
    "JavascriptValidator",
    "PropertyNotFoundError",
    "JAVASCRIPT_VALIDATION_RULE",
    "REMOTE_RULE",
    "FORM_REQUEST_RULE",
]
