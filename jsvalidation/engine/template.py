"""
JsValidation Views
==================

Jinja2 rendering of the validation `<script>` views.

Features:
- Built-in `bootstrap`, `bootstrap4` and `bootstrap5` views
- `jsvalidation::` namespaced view names
- User view directories searched before the built-in views
- `json_script` and `js` filters for safe embedding in `<script>`

Example:
    views = ViewFactory("resources/views/vendor/jsvalidation")
    html = views.render("jsvalidation::bootstrap4", {"validator": data})
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from jinja2 import (
    ChoiceLoader,
    Environment,
    FileSystemLoader,
    PackageLoader,
    StrictUndefined,
    TemplateNotFound,
    TemplateSyntaxError,
    UndefinedError,
)

from jsvalidation.security.xss import escape_js, json_script
from jsvalidation.utils.logger import get_logger

logger = get_logger("jsvalidation.views")

NAMESPACE = "jsvalidation"

BUILTIN_VIEWS = ("bootstrap", "bootstrap4", "bootstrap5")

# Directory of the built-in views inside the package
VIEWS_PATH = Path(__file__).resolve().parent.parent / "views"


class TemplateError(Exception):
    """Base exception for view errors."""
    pass


class ViewNotFoundError(TemplateError):
    """Raised when a view cannot be found."""
    pass


class ViewRenderError(TemplateError):
    """Raised when a view fails to compile or render."""
    pass


def normalize_view_name(name: str) -> str:
    """
    Strip the package namespace and add the `.html` extension.

    Example:
        >>> normalize_view_name("jsvalidation::bootstrap4")
        'bootstrap4.html'
    """
    for prefix in (f"{NAMESPACE}::", f"{NAMESPACE}:"):
        if name.startswith(prefix):
            name = name[len(prefix):]
            break

    if not Path(name).suffix:
        name = f"{name}.html"
    return name


class ViewFactory:
    """
    View environment with directory-based lookup.

    Directories passed in are searched in order, then the built-in views.

    Example:
        views = ViewFactory("templates/jsvalidation")
        views.add_global("app_name", "Shop")
        html = views.render("bootstrap", {"validator": data})
    """

    def __init__(self, *paths: Union[str, Path]) -> None:
        """
        Initialize the view environment.

        Args:
            *paths: View directories overriding the built-in views
        """
        self.paths: List[Path] = []
        for path in paths:
            self.add_path(path)

        self.environment = Environment(
            loader=self._build_loader(),
            autoescape=False,
            undefined=StrictUndefined,
            keep_trailing_newline=True,
        )
        self.environment.filters["json_script"] = json_script
        self.environment.filters["js"] = escape_js

    def _build_loader(self) -> ChoiceLoader:
        loaders: List[Any] = [FileSystemLoader([str(p) for p in self.paths])]
        loaders.append(PackageLoader("jsvalidation", "views"))
        return ChoiceLoader(loaders)

    def add_path(self, path: Union[str, Path]) -> None:
        """Add a view directory ahead of the built-in views."""
        path = Path(path)
        if path not in self.paths:
            self.paths.append(path)
            if hasattr(self, "environment"):
                self.environment.loader = self._build_loader()

    def add_global(self, name: str, value: Any) -> None:
        """Add global view variable."""
        self.environment.globals[name] = value

    def add_filter(self, name: str, func: Any) -> None:
        """Add custom filter function."""
        self.environment.filters[name] = func

    def exists(self, name: str) -> bool:
        """Check if a view exists."""
        try:
            self.environment.get_template(normalize_view_name(name))
        except TemplateNotFound:
            return False
        return True

    def render(self, name: str, context: Optional[Dict[str, Any]] = None) -> str:
        """
        Render a view.

        Args:
            name: View name, optionally `jsvalidation::` namespaced
            context: View variables

        Raises:
            ViewNotFoundError: If the view does not exist
            ViewRenderError: If the view has errors
        """
        template_name = normalize_view_name(name)

        try:
            template = self.environment.get_template(template_name)
        except TemplateNotFound as e:
            raise ViewNotFoundError(
                f"View '{name}' not found in paths: {[str(p) for p in self.paths]} or built-in views"
            ) from e
        except TemplateSyntaxError as e:
            raise ViewRenderError(f"View '{name}' has a syntax error: {e}") from e

        logger.debug("Rendering view", view=template_name)

        try:
            return template.render(**(context or {}))
        except UndefinedError as e:
            raise ViewRenderError(f"View '{name}' failed to render: {e}") from e


# Convenience functions

_default_factory: Optional[ViewFactory] = None


def configure(*paths: Union[str, Path]) -> ViewFactory:
    """
    Configure the default view factory.

    Args:
        *paths: View directories overriding the built-in views

    Returns:
        Configured ViewFactory
    """
    global _default_factory
    _default_factory = ViewFactory(*paths)
    return _default_factory


def get_view_factory() -> ViewFactory:
    """Get the default view factory, built from the `view_paths` setting."""
    global _default_factory
    if _default_factory is None:
        from jsvalidation.core.config import get_config

        _default_factory = ViewFactory(*get_config().get_list("view_paths"))
    return _default_factory
