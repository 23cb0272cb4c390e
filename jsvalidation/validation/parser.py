"""
JsValidation Rule Parser
========================

Normalises rule definitions and splits rules into name and parameters.

    "required|max:255"      -> ["required", "max:255"]
    "max:255"               -> ("Max", ["255"])
    'in:"a,b",c'            -> ("In", ["a,b", "c"])
    "regex:/^[a-z,]+$/i"    -> ("Regex", ["/^[a-z,]+$/i"])
"""

from __future__ import annotations

import csv
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple, Union

from jsvalidation.utils.helpers import studly_case
from jsvalidation.validation.rules import STRINGABLE_RULES, CallableRule, Rule


class InvalidRuleError(ValueError):
    """Raised when a rule cannot be parsed or has no implementation."""
    pass


# Rules whose single parameter may contain commas
_UNSPLIT_PARAMETER_RULES = ("regex", "not_regex", "notregex")

_ALIASES = {"Int": "Integer", "Bool": "Boolean"}


@dataclass
class ParsedRules:
    """Result of exploding a rule set."""
    rules: Dict[str, List[Any]] = field(default_factory=dict)
    implicit_attributes: Dict[str, List[str]] = field(default_factory=dict)


class ValidationRuleParser:
    """
    Explodes rules against the data under validation.

    Wildcard attributes (`items.*.name`) are expanded into one attribute
    per matching data key (`items.0.name`, `items.1.name`). Wildcards with
    no matching data produce no attributes.

    Example:
        parser = ValidationRuleParser({"items": [{"name": "a"}]})
        parsed = parser.explode({"items.*.name": "required|max:5"})
        parsed.rules  # {"items.0.name": ["required", "max:5"]}
    """

    def __init__(self, data: Dict[str, Any]) -> None:
        self.data = data

    def explode(self, rules: Dict[str, Any]) -> ParsedRules:
        """Normalise rules to `{attribute: [raw rule, ...]}`."""
        parsed = ParsedRules()

        for attribute, rule in rules.items():
            attribute = str(attribute)
            exploded = self.explode_explicit_rule(rule)

            if "*" not in attribute:
                parsed.rules.setdefault(attribute, []).extend(exploded)
                continue

            matches = self._expand_wildcard(attribute.split("."), self.data, "")
            for key in matches:
                parsed.implicit_attributes.setdefault(attribute, []).append(key)
                parsed.rules.setdefault(key, []).extend(exploded)

        return parsed

    def explode_explicit_rule(self, rule: Any) -> List[Any]:
        """Explode one attribute's rules into a list of raw rules."""
        if isinstance(rule, str):
            return [part for part in rule.split("|") if part.strip()]
        if isinstance(rule, (list, tuple)):
            return [self.prepare_rule(item) for item in rule if item not in ("", None)]
        return [self.prepare_rule(rule)]

    @staticmethod
    def prepare_rule(rule: Any) -> Any:
        """Render stringable builders and wrap plain callables."""
        if isinstance(rule, STRINGABLE_RULES):
            return str(rule)
        if isinstance(rule, (str, Rule)):
            return rule
        if callable(rule):
            return CallableRule(rule)
        raise InvalidRuleError(f"Unsupported rule type: {type(rule).__name__}")

    def _expand_wildcard(self, segments: List[str], current: Any, prefix: str) -> List[str]:
        if not segments:
            return [prefix]

        head, rest = segments[0], segments[1:]

        if head == "*":
            if isinstance(current, dict):
                keys: List[Any] = list(current.keys())
            elif isinstance(current, (list, tuple)):
                keys = list(range(len(current)))
            else:
                return []

            expanded: List[str] = []
            for key in keys:
                expanded.extend(self._expand_wildcard(rest, current[key], _join(prefix, key)))
            return expanded

        child = None
        if isinstance(current, dict):
            child = current.get(head)
        elif isinstance(current, (list, tuple)) and head.isdigit() and int(head) < len(current):
            child = current[int(head)]

        return self._expand_wildcard(rest, child, _join(prefix, head))

    @staticmethod
    def parse(rule: Any) -> Tuple[Union[str, Rule], List[str]]:
        """
        Extract the rule name and parameters from a raw rule.

        Rule objects are returned unchanged with no parameters.
        """
        if isinstance(rule, Rule):
            return rule, []

        if isinstance(rule, STRINGABLE_RULES):
            rule = str(rule)
        elif not isinstance(rule, str):
            raise InvalidRuleError(f"Unsupported rule type: {type(rule).__name__}")

        rule = rule.strip()
        parameters: List[str] = []

        if ":" in rule:
            rule, parameter = rule.split(":", 1)
            parameters = ValidationRuleParser.parse_parameters(rule, parameter)

        name = studly_case(rule.strip())
        return _ALIASES.get(name, name), parameters

    @staticmethod
    def parse_parameters(rule: str, parameter: str) -> List[str]:
        """Parse a parameter list, keeping regex patterns whole."""
        if rule.strip().lower() in _UNSPLIT_PARAMETER_RULES:
            return [parameter]
        return next(csv.reader([parameter], skipinitialspace=False), [])


def _join(prefix: str, key: Any) -> str:
    return f"{prefix}.{key}" if prefix else str(key)


def wildcard_pattern(pattern: str) -> "re.Pattern[str]":
    """Compile a wildcard attribute where `*` matches one segment."""
    return re.compile("^" + re.escape(pattern).replace(r"\*", "[^.]*") + r"\Z")
