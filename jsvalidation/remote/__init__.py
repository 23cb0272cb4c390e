"""
JsValidation Remote Module
==========================

Server side of the plugin's AJAX rules.

Components:
- RemoteValidationMiddleware: enables remote validation per request
- Resolver / RemoteRule: validators carrying the `jsvalidation` rule
- RemoteValidator: validates one attribute and answers in JSON
- JsValidationFormRequest: whole-form AJAX validation
"""

from jsvalidation.remote.form_request import JS_VALIDATION_FIELD, JsValidationFormRequest
from jsvalidation.remote.middleware import RemoteValidationMiddleware
from jsvalidation.remote.resolver import RemoteRule, Resolver
from jsvalidation.remote.validator import EXTENSION_NAME, RemoteValidator

__all__ = [
    "RemoteValidationMiddleware",
    "Resolver",
    "RemoteRule",
    "RemoteValidator",
    "JsValidationFormRequest",
    "EXTENSION_NAME",
    "JS_VALIDATION_FIELD",
]
