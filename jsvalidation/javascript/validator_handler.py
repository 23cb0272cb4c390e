"""
JsValidation Validator Handler
==============================

Walks the validator's rules and builds the client rule map.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional, Union

from jsvalidation.javascript.message_parser import MessageParser
from jsvalidation.javascript.rule_parser import REMOTE_RULE, RuleParser
from jsvalidation.support.delegated_validator import DelegatedValidator
from jsvalidation.support.rule_lists import ASTERISK, DISABLE_JS_VALIDATION
from jsvalidation.validation.rules import Rule
from jsvalidation.utils.logger import get_logger

logger = get_logger("jsvalidation")

# {html attribute: {js method: [[rule, params, message, implicit, attribute], ...]}}
JsRules = Dict[str, Dict[str, List[List[Any]]]]


class ValidatorHandler:
    """
    Builds `{"rules": ..., "messages": []}` for the client plugin.

    Example:
        handler = ValidatorHandler(RuleParser(delegated, token), MessageParser(delegated))
        handler.set_validator(delegated)
        handler.validation_data()["rules"]["email"]["laravelValidation"]
        # [["Required", [], "The email field is required.", True, "email"], ...]
    """

    def __init__(self, rules: RuleParser, messages: MessageParser) -> None:
        self.rules = rules
        self.messages = messages
        self.validator: DelegatedValidator = rules.validator
        self.remote = True

    def set_validator(self, validator: DelegatedValidator) -> None:
        self.validator = validator

    def set_remote(self, flag: bool) -> None:
        """Include or drop rules needing the server."""
        self.remote = flag

    def validation_data(self) -> Dict[str, Any]:
        return {"rules": self.generate_javascript_validations(), "messages": []}

    def generate_javascript_validations(self) -> JsRules:
        js_validations: JsRules = {}

        for attribute, rules in self.validator.get_rules().items():
            if not self.js_validation_enabled(attribute):
                logger.debug("Client validation disabled", attribute=attribute)
                continue

            converted = self.js_convert_rules(attribute, rules, self.remote)
            for js_attribute, methods in converted.items():
                target = js_validations.setdefault(js_attribute, {})
                for js_rule, entries in methods.items():
                    target.setdefault(js_rule, []).extend(entries)

        return js_validations

    def js_convert_rules(self, attribute: str, rules: List[Any], include_remote: bool) -> JsRules:
        """Convert one attribute's raw rules."""
        js_rules: JsRules = {}

        for raw_rule in rules:
            rule, parameters = self.validator.parse_rule(raw_rule)
            js_attribute, js_rule, js_params = self.rules.get_rule(attribute, rule, parameters, raw_rule)

            if not self.is_validatable(js_rule, include_remote):
                continue

            js_rules.setdefault(js_attribute, {}).setdefault(js_rule, []).append([
                rule.name if isinstance(rule, Rule) else rule,
                js_params,
                self.messages.get_message(attribute, rule, parameters),
                self.validator.is_implicit(rule),
                attribute.replace(ASTERISK, "*"),
            ])

        return js_rules

    @staticmethod
    def is_validatable(js_rule: Optional[str], include_remote: bool) -> bool:
        return bool(js_rule) and (include_remote or js_rule != REMOTE_RULE)

    def js_validation_enabled(self, attribute: str) -> bool:
        return not self.validator.has_rule(attribute, DISABLE_JS_VALIDATION)

    def sometimes(self, attribute: Union[str, Iterable[str]], rules: Any = None) -> None:
        """Add rules validated remotely whatever the data."""
        rules = rules if rules is not None else []
        self.validator.sometimes(attribute, rules, lambda data: True)
        self.rules.add_conditional_rules(attribute, rules)
