"""
JsValidation Delegated Validator
================================

Stable facade the JavaScript translation uses over the server validator.

The translation only talks to the validator through this class, so
validator internals can change without touching the rule and message
parsers.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Iterable, List, Tuple, Union

from jsvalidation.validation.parser import ValidationRuleParser
from jsvalidation.validation.rules import Rule
from jsvalidation.validation.validator import Validator


class ValidationRuleParserProxy:
    """Rule parser bound to a data snapshot."""

    def __init__(self, data: Dict[str, Any]) -> None:
        self.parser = ValidationRuleParser(data)

    def parse(self, rule: Any) -> Tuple[Union[str, Rule], List[str]]:
        return self.parser.parse(rule)

    def explode_rules(self, rules: Dict[str, Any]) -> Dict[str, List[Any]]:
        return self.parser.explode(rules).rules


class DelegatedValidator:
    """
    Delegates to a `Validator`.

    Example:
        delegated = DelegatedValidator(validator, ValidationRuleParserProxy(validator.get_data()))
        delegated.has_rule("email", ["Email"])
    """

    def __init__(self, validator: Validator, rule_parser: ValidationRuleParserProxy) -> None:
        self.validator = validator
        self.rule_parser = rule_parser

    def get_validator(self) -> Validator:
        return self.validator

    def get_data(self) -> Dict[str, Any]:
        return self.validator.get_data()

    def set_data(self, data: Dict[str, Any]) -> None:
        self.validator.set_data(data)

    def get_rules(self) -> Dict[str, List[Any]]:
        return self.validator.get_rules()

    def has_rule(self, attribute: str, rules: Union[str, Iterable[str]]) -> bool:
        return self.validator.has_rule(attribute, rules)

    def is_implicit(self, rule: Any) -> bool:
        return self.validator.is_implicit(rule)

    def parse_rule(self, rule: Any) -> Tuple[Union[str, Rule], List[str]]:
        return self.rule_parser.parse(rule)

    def explode_rules(self, rules: Dict[str, Any]) -> Dict[str, List[Any]]:
        return self.rule_parser.explode_rules(rules)

    def get_message(self, attribute: str, rule: Any) -> str:
        return self.validator.get_message(attribute, rule)

    def make_replacements(self, message: str, attribute: str, rule: Any, parameters: List[str]) -> str:
        return self.validator.make_replacements(message, attribute, rule, parameters)

    def get_display_name(self, attribute: str) -> str:
        return self.validator.get_display_name(attribute)

    def sometimes(self, attribute: Union[str, Iterable[str]], rules: Any, callback: Callable[..., bool]) -> None:
        self.validator.sometimes(attribute, rules, callback)
