"""
JsValidation Remote Validator
=============================

Validates the single attribute a remote validation request asks about
and answers through `HttpResponseException`.

Answers:
    true                                  the attribute is valid
    ["The email has already been taken."] the attribute's messages
"""

from __future__ import annotations

from typing import Any, List, Union

from jsvalidation.core.response import HttpResponseException, JSONResponse
from jsvalidation.security.xss import escape_html
from jsvalidation.support.rule_lists import is_remote_rule, validation_disabled
from jsvalidation.utils.helpers import dotted_name
from jsvalidation.utils.logger import get_logger
from jsvalidation.validation.parser import ValidationRuleParser
from jsvalidation.validation.validator import Validator

logger = get_logger("jsvalidation.remote")

EXTENSION_NAME = "jsvalidation"

Result = Union[bool, List[str]]


class RemoteValidator:
    """Restricts a running validator to one attribute and answers for it."""

    def __init__(self, validator: Validator, escape: bool = False) -> None:
        self.validator = validator
        self.escape = escape

    def validate(self, field: Any, parameters: List[str]) -> None:
        """
        Validate the attribute named by an HTML field name.

        Args:
            field: HTML name of the attribute (`user[email]`)
            parameters: `["true"]` validates every rule of the attribute

        Raises:
            HttpResponseException: Always, carrying the JSON answer
        """
        attribute = self.parse_attribute_name(field)
        self.set_remote_validation(attribute, self.parse_validate_all(parameters))

        result: Result = True if self.validator.passes() else self.get_messages(attribute)
        self.throw_validation_exception(attribute, result)

    async def validate_async(self, field: Any, parameters: List[str]) -> None:
        """Async variant of `validate`, running presence checks."""
        attribute = self.parse_attribute_name(field)
        self.set_remote_validation(attribute, self.parse_validate_all(parameters))

        result: Result = True if await self.validator.passes_async() else self.get_messages(attribute)
        self.throw_validation_exception(attribute, result)

    @staticmethod
    def parse_attribute_name(field: Any) -> str:
        return dotted_name(str(field or ""))

    @staticmethod
    def parse_validate_all(parameters: List[str]) -> bool:
        return bool(parameters) and parameters[0] == "true"

    def set_remote_validation(self, attribute: str, validate_all: bool = False) -> None:
        """Keep only the rules the client could not check itself."""
        rules = list(self.validator.get_rules().get(attribute, []))
        names = [ValidationRuleParser.parse(rule)[0] for rule in rules]

        if validation_disabled(names):
            self.validator.set_rules({attribute: []})
            return

        if not validate_all:
            rules = [rule for rule, name in zip(rules, names) if is_remote_rule(name)]

        self.validator.set_rules({attribute: rules})

    def get_messages(self, attribute: str) -> List[str]:
        messages = self.validator.errors().get(attribute)
        if self.escape:
            messages = [escape_html(message) for message in messages]
        return messages

    @staticmethod
    def throw_validation_exception(attribute: str, result: Result) -> None:
        logger.debug("Remote validation answered", attribute=attribute, valid=result is True)
        raise HttpResponseException(JSONResponse(result, status_code=200))
