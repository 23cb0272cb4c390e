"""
JsValidation Client Rules
=========================

Translation of rule parameters into what the browser plugin expects.

Rules referring to other fields get those fields' HTML names; date
rules get unix timestamps when their parameter is a literal date.
"""

from __future__ import annotations

from typing import Callable, List, Tuple

from jsvalidation.utils.helpers import is_numeric, parse_date, snake_case

# Client-side method of the plugin
JAVASCRIPT_VALIDATION_RULE = "laravelValidation"


class ClientRulesMixin:
    """Parameter translation, mixed into `RuleParser`."""

    get_attribute_name: Callable[[str], str]

    def client_rule(self, attribute: str, rule: str, parameters: List[str]) -> Tuple[str, str, List]:
        """Translate a client rule into `(js method, attribute, parameters)`."""
        method = getattr(self, f"rule_{snake_case(rule)}", None)
        if method is not None:
            attribute, parameters = method(attribute, list(parameters))
        return JAVASCRIPT_VALIDATION_RULE, attribute, parameters

    def rule_confirmed(self, attribute: str, parameters: List[str]) -> Tuple[str, List]:
        # Checked on the confirmation field against the original one
        return f"{attribute}_confirmation", [self.get_attribute_name(attribute)]

    def rule_after(self, attribute: str, parameters: List[str]) -> Tuple[str, List]:
        return attribute, [self._date_parameter(parameters[0])]

    def rule_after_or_equal(self, attribute: str, parameters: List[str]) -> Tuple[str, List]:
        return self.rule_after(attribute, parameters)

    def rule_before(self, attribute: str, parameters: List[str]) -> Tuple[str, List]:
        return self.rule_after(attribute, parameters)

    def rule_before_or_equal(self, attribute: str, parameters: List[str]) -> Tuple[str, List]:
        return self.rule_after(attribute, parameters)

    def rule_date_equals(self, attribute: str, parameters: List[str]) -> Tuple[str, List]:
        return self.rule_after(attribute, parameters)

    def _date_parameter(self, parameter: str):
        parsed = parse_date(parameter)
        if parsed is None:
            return self.get_attribute_name(parameter)
        return int(parsed.timestamp())

    def rule_same(self, attribute: str, parameters: List[str]) -> Tuple[str, List]:
        return attribute, [self.get_attribute_name(parameters[0])]

    def rule_different(self, attribute: str, parameters: List[str]) -> Tuple[str, List]:
        return self.rule_same(attribute, parameters)

    def rule_required_if(self, attribute: str, parameters: List[str]) -> Tuple[str, List]:
        parameters[0] = self.get_attribute_name(parameters[0])
        return attribute, parameters

    def rule_required_unless(self, attribute: str, parameters: List[str]) -> Tuple[str, List]:
        return self.rule_required_if(attribute, parameters)

    def rule_required_with(self, attribute: str, parameters: List[str]) -> Tuple[str, List]:
        return attribute, [self.get_attribute_name(p) for p in parameters]

    def rule_required_with_all(self, attribute: str, parameters: List[str]) -> Tuple[str, List]:
        return self.rule_required_with(attribute, parameters)

    def rule_required_without(self, attribute: str, parameters: List[str]) -> Tuple[str, List]:
        return self.rule_required_with(attribute, parameters)

    def rule_required_without_all(self, attribute: str, parameters: List[str]) -> Tuple[str, List]:
        return self.rule_required_with(attribute, parameters)

    def rule_gt(self, attribute: str, parameters: List[str]) -> Tuple[str, List]:
        if not parameters or is_numeric(parameters[0]):
            return attribute, parameters
        return attribute, [self.get_attribute_name(parameters[0])]

    def rule_gte(self, attribute: str, parameters: List[str]) -> Tuple[str, List]:
        return self.rule_gt(attribute, parameters)

    def rule_lt(self, attribute: str, parameters: List[str]) -> Tuple[str, List]:
        return self.rule_gt(attribute, parameters)

    def rule_lte(self, attribute: str, parameters: List[str]) -> Tuple[str, List]:
        return self.rule_gt(attribute, parameters)
