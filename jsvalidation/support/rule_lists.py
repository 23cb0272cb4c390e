"""
JsValidation Rule Lists
=======================

Which rules the browser plugin evaluates, which need the server, and the
marker rules understood by the JavaScript validator.
"""

from __future__ import annotations

from typing import Any, Iterable

# Rules with a client-side implementation in the jQuery plugin
CLIENT_RULES = frozenset({
    "Accepted",
    "After",
    "AfterOrEqual",
    "Alpha",
    "AlphaDash",
    "AlphaNum",
    "Array",
    "Bail",
    "Before",
    "BeforeOrEqual",
    "Between",
    "Boolean",
    "Confirmed",
    "Date",
    "DateEquals",
    "DateFormat",
    "Different",
    "Digits",
    "DigitsBetween",
    "Email",
    "File",
    "Filled",
    "Gt",
    "Gte",
    "Image",
    "In",
    "Integer",
    "Ip",
    "Ipv4",
    "Ipv6",
    "Json",
    "Lt",
    "Lte",
    "Max",
    "Mimes",
    "Mimetypes",
    "Min",
    "NotIn",
    "NotRegex",
    "Nullable",
    "Numeric",
    "Regex",
    "Required",
    "RequiredIf",
    "RequiredUnless",
    "RequiredWith",
    "RequiredWithAll",
    "RequiredWithout",
    "RequiredWithoutAll",
    "Same",
    "Size",
    "Sometimes",
    "String",
    "Timezone",
    "Url",
    "Uuid",
    "ProengsoftNoop",
})

# Rules that always need the server
SERVER_RULES = frozenset({"ActiveUrl", "Exists", "Unique"})

# Attributes carrying this rule are left out of client validation
DISABLE_JS_VALIDATION = "NoJsValidation"

# Always-valid client rule standing in for server-validated form fields
NOOP_RULE = "ProengsoftNoop"

# Rule validating a whole form request through one AJAX call
FORM_REQUEST_RULE_NAME = "ProengsoftFormRequest"

# Placeholder for `*` in fake data keys, turned back into `*` on output
ASTERISK = "__asterisk__"


def is_remote_rule(rule: Any) -> bool:
    """Check whether a parsed rule must be validated by the server."""
    if not isinstance(rule, str):
        return True
    return rule in SERVER_RULES or rule not in CLIENT_RULES


def is_form_request_rule(rule: Any) -> bool:
    return rule == FORM_REQUEST_RULE_NAME


def validation_disabled(rules: Iterable[Any]) -> bool:
    """Check whether parsed rule names include the disable marker."""
    return DISABLE_JS_VALIDATION in rules
