"""
JsValidation Security Module
============================

CSRF token verification, token encryption and output escaping.
"""

from jsvalidation.security.csrf import CSRFConfig, VerifyCsrfToken, csrf_field, csrf_meta
from jsvalidation.security.encrypter import DecryptError, EncryptionError, Encrypter
from jsvalidation.security.xss import escape_html, escape_js, json_script

__all__ = [
    # CSRF
    "CSRFConfig",
    "VerifyCsrfToken",
    "csrf_field",
    "csrf_meta",
    # Encryption
    "Encrypter",
    "EncryptionError",
    "DecryptError",
    # Escaping
    "escape_html",
    "escape_js",
    "json_script",
]
