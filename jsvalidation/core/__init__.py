"""
JsValidation Core Module
========================

HTTP primitives, configuration and session used by the validator
factory and the remote validation endpoint.
"""

from jsvalidation.core.config import Config, DEFAULTS, get_config, set_config
from jsvalidation.core.middleware import Middleware, chain
from jsvalidation.core.request import Request, UploadedFile, build_request
from jsvalidation.core.response import (
    HTMLResponse,
    HttpResponseException,
    JSONResponse,
    Response,
)
from jsvalidation.core.session import Session

__all__ = [
    "Config",
    "DEFAULTS",
    "get_config",
    "set_config",
    "Middleware",
    "chain",
    "Request",
    "UploadedFile",
    "build_request",
    "Response",
    "HTMLResponse",
    "JSONResponse",
    "HttpResponseException",
    "Session",
]
