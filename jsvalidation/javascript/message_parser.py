"""
JsValidation Message Parser
===========================

Renders the error message the server would produce if a rule failed.

Some messages depend on the data (the file size line for uploads, the
`:value` of `required_if`), so the parser swaps in fake data while it
renders and restores the real data afterwards.
"""

from __future__ import annotations

import copy
from typing import Any, Dict, List

from jsvalidation.core.request import UploadedFile
from jsvalidation.security.xss import escape_html
from jsvalidation.support.delegated_validator import DelegatedValidator
from jsvalidation.support.rule_lists import ASTERISK
from jsvalidation.utils.helpers import set_nested

FILE_RULES = ("Mimes", "Mimetypes", "Image", "File")


class MessageParser:
    """
    Example:
        parser = MessageParser(delegated, escape=True)
        parser.get_message("email", "Email", [])
        # "The email must be a valid email address."
    """

    def __init__(self, validator: DelegatedValidator, escape: bool = False) -> None:
        self.validator = validator
        self.escape = escape

    def get_message(self, attribute: str, rule: Any, parameters: List[str]) -> str:
        data = self.fake_validation_data(attribute, rule, parameters)

        try:
            message = self.validator.get_message(attribute, rule)
            message = self.validator.make_replacements(message, attribute, rule, parameters)
        finally:
            self.validator.set_data(data)

        message = message.replace(ASTERISK, "*")
        return escape_html(message) if self.escape else message

    def fake_validation_data(self, attribute: str, rule: Any, parameters: List[str]) -> Dict[str, Any]:
        """Install fake data for the message and return the real data."""
        data = self.validator.get_data()
        fake = copy.deepcopy(data)

        if self.validator.has_rule(attribute, FILE_RULES):
            set_nested(fake, attribute, self.create_fake_uploaded_file())

        if rule == "RequiredIf" and len(parameters) > 1:
            set_nested(fake, parameters[0], parameters[1])

        self.validator.set_data(fake)
        return data

    @staticmethod
    def create_fake_uploaded_file() -> UploadedFile:
        return UploadedFile(filename="jsvalidation", content=b"", error=True)
