"""
JsValidation Remote Form Request
================================

Form request validated as a whole through one AJAX call.

Forms using it get an always-valid client rule per field plus one
form-request rule. The plugin posts the whole form with
`__proengsoft_form_request`; the request answers `true` or every
failing field's messages keyed by HTML name.
"""

from __future__ import annotations

from typing import Dict, List

from jsvalidation.core.response import HttpResponseException, JSONResponse
from jsvalidation.utils.helpers import html_name
from jsvalidation.validation.form import FormRequest
from jsvalidation.validation.validator import Validator

JS_VALIDATION_FIELD = "__proengsoft_form_request"


class JsValidationFormRequest(FormRequest):
    """
    Example:
        class StoreUserRequest(JsValidationFormRequest):
            def rules(self):
                return {"email": "required|email|unique:users"}

        jsvalidation.form_request(StoreUserRequest)
    """

    def is_js_validation(self) -> bool:
        return self.has(JS_VALIDATION_FIELD)

    def failed_validation(self, validator: Validator) -> None:
        if self.is_js_validation():
            raise HttpResponseException(JSONResponse(self.convert_errors(validator), status_code=422))

        super().failed_validation(validator)

    def passed_validation(self) -> None:
        if self.is_js_validation():
            raise HttpResponseException(JSONResponse(True))

        super().passed_validation()

    @staticmethod
    def convert_errors(validator: Validator) -> Dict[str, List[str]]:
        """Messages keyed by HTML field name."""
        return {html_name(key): messages for key, messages in validator.errors().messages().items()}
