"""
JsValidation View Engine
========================

Jinja2 environment rendering the validation script views.
"""

from jsvalidation.engine.template import (
    BUILTIN_VIEWS,
    VIEWS_PATH,
    TemplateError,
    ViewFactory,
    ViewNotFoundError,
    ViewRenderError,
    configure,
    get_view_factory,
    normalize_view_name,
)

__all__ = [
    "ViewFactory",
    "TemplateError",
    "ViewNotFoundError",
    "ViewRenderError",
    "BUILTIN_VIEWS",
    "VIEWS_PATH",
    "configure",
    "get_view_factory",
    "normalize_view_name",
]
