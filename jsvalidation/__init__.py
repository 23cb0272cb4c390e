"""
JsValidation - Client-side validation from server-side rules
============================================================

Define validation rules once, on the server, and get the same
constraints enforced in the browser by the jQuery Validation plugin
and its `laravelValidation*` methods.

Features:
---------
- Rule strings (`"required|email|max:255"`) translated to client rules
- Error messages rendered exactly as the server would produce them
- AJAX remote validation for rules the browser cannot check
  (`unique`, `exists`, custom rules and rule objects)
- Whole-form AJAX validation for form requests
- Bootstrap 3/4/5 views rendered with Jinja2
- CLI to publish config and views and inspect generated rules

Quick Start:
    import jsvalidation

    validator = jsvalidation.make({"email": "required|email|unique:users"})
    html = validator.selector("#register").render()
"""

from __future__ import annotations

__version__ = "1.0.0"
__author__ = "JsValidation Team"
__license__ = "MIT"

from typing import TYPE_CHECKING

# Core imports (always available)
from jsvalidation.core.config import Config
from jsvalidation.core.request import Request
from jsvalidation.core.response import Response
from jsvalidation.core.middleware import Middleware

# Lazy imports for performance
if TYPE_CHECKING:
    from jsvalidation.factory import JsValidatorFactory
    from jsvalidation.javascript import JavascriptValidator
    from jsvalidation.validation import Validator, FormRequest, Rule
    from jsvalidation.remote import RemoteValidationMiddleware, JsValidationFormRequest


def __getattr__(name: str):
    """Lazy loading of components for faster startup."""
    _imports = {
        # Factory
        "JsValidatorFactory": "jsvalidation.factory",
        "configure": "jsvalidation.factory",
        "get_factory": "jsvalidation.factory",
        "make": "jsvalidation.factory",
        "form_request": "jsvalidation.factory",
        "validator": "jsvalidation.factory",
        # JavaScript
        "JavascriptValidator": "jsvalidation.javascript.javascript_validator",
        # Validation
        "Validator": "jsvalidation.validation.validator",
        "ValidationError": "jsvalidation.validation.validator",
        "FormRequest": "jsvalidation.validation.form",
        "Rule": "jsvalidation.validation.rules",
        "Factory": "jsvalidation.validation.factory",
        # Remote
        "RemoteValidationMiddleware": "jsvalidation.remote.middleware",
        "JsValidationFormRequest": "jsvalidation.remote.form_request",
        # Security
        "Session": "jsvalidation.core.session",
        "Encrypter": "jsvalidation.security.encrypter",
        "VerifyCsrfToken": "jsvalidation.security.csrf",
        # Views
        "ViewFactory": "jsvalidation.engine.template",
        # Utils
        "Logger": "jsvalidation.utils.logger",
    }

    if name in _imports:
        import importlib
        module = importlib.import_module(_imports[name])
        return getattr(module, name)

    raise AttributeError(f"module 'jsvalidation' has no attribute '{name}'")


__all__ = [
    # Metadata
    "__version__",
    "__author__",
    "__license__",
    # Core (always loaded)
    "Config",
    "Request",
    "Response",
    "Middleware",
    # Factory (lazy)
    "JsValidatorFactory",
    "configure",
    "get_factory",
    "make",
    "form_request",
    "validator",
    # JavaScript (lazy)
    "JavascriptValidator",
    # Validation (lazy)
    "Validator",
    "ValidationError",
    "FormRequest",
    "Rule",
    "Factory",
    # Remote (lazy)
    "RemoteValidationMiddleware",
    "JsValidationFormRequest",
    # Security (lazy)
    "Session",
    "Encrypter",
    "VerifyCsrfToken",
    # Views (lazy)
    "ViewFactory",
    # Utils (lazy)
    "Logger",
]
