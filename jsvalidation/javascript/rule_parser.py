"""
JsValidation Rule Parser
========================

Maps each server rule to the client method that enforces it.

Client rules run in the browser through `laravelValidation`. Server-only
rules, unknown extensions, rule objects and rules added with `sometimes()`
fall back to an AJAX call through `laravelValidationRemote`; the form
request marker validates the whole form through
`laravelValidationFormRequest`.

Example:
    parser = RuleParser(delegated, remote_token="encrypted-token")
    parser.get_rule("email", "Unique", ["users"], "unique:users")
    # ("email", "laravelValidationRemote", ["email", "encrypted-token", False])
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

from jsvalidation.javascript.client_rules import JAVASCRIPT_VALIDATION_RULE, ClientRulesMixin
from jsvalidation.support.delegated_validator import DelegatedValidator
from jsvalidation.support.rule_lists import ASTERISK, is_form_request_rule, is_remote_rule
from jsvalidation.utils.helpers import html_name

REMOTE_RULE = "laravelValidationRemote"

FORM_REQUEST_RULE = "laravelValidationFormRequest"

__all__ = [
    "RuleParser",
    "JAVASCRIPT_VALIDATION_RULE",
    "REMOTE_RULE",
    "FORM_REQUEST_RULE",
]


class RuleParser(ClientRulesMixin):
    """Translates `(attribute, rule, parameters)` into client rules."""

    def __init__(self, validator: DelegatedValidator, remote_token: Optional[str] = None) -> None:
        self.validator = validator
        self.remote_token = remote_token
        self.conditional_rules: Dict[str, List[Any]] = {}

    def get_rule(
        self,
        attribute: str,
        rule: Any,
        parameters: List[str],
        raw_rule: Any,
    ) -> Tuple[str, str, List[Any]]:
        """
        Translate one rule.

        Args:
            attribute: Dotted attribute name
            rule: Parsed rule name, or a rule object
            parameters: Parsed rule parameters
            raw_rule: Rule as written, used to detect conditional rules

        Returns:
            Tuple of (html attribute name, js method, js parameters)
        """
        is_conditional = self.is_conditional_rule(attribute, raw_rule)
        is_form_request = is_form_request_rule(rule)

        if is_form_request or is_conditional or is_remote_rule(rule):
            parameters = self.remote_rule(attribute, is_conditional)
            js_rule = FORM_REQUEST_RULE if is_form_request else REMOTE_RULE
        else:
            js_rule, attribute, parameters = self.client_rule(attribute, rule, parameters)

        return self.get_attribute_name(attribute), js_rule, parameters

    def remote_rule(self, attribute: str, force_remote: bool) -> List[Any]:
        """Parameters of an AJAX rule: field, token and forced flag."""
        return [self.get_attribute_name(attribute), self.remote_token, force_remote]

    def get_attribute_name(self, attribute: str) -> str:
        return html_name(attribute.replace(ASTERISK, "*"))

    def set_remote_token(self, token: Optional[str]) -> None:
        self.remote_token = token

    def add_conditional_rules(self, attribute: Union[str, Iterable[str]], rules: Any = None) -> None:
        """Record rules added with `sometimes()`; they are always validated remotely."""
        attributes = [attribute] if isinstance(attribute, str) else list(attribute)
        exploded = self.validator.explode_rules({"0": rules or []}).get("0", [])

        for key in attributes:
            self.conditional_rules.setdefault(key, []).extend(exploded)

    def is_conditional_rule(self, attribute: str, raw_rule: Any) -> bool:
        return raw_rule in self.conditional_rules.get(attribute, [])
