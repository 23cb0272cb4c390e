"""
JsValidation JavaScript Validator
=================================

The object handed to templates: renders the validation `<script>` and
exposes the rule map.

Example:
    validator = jsvalidation.make({"email": "required|email"})
    html = validator.selector("#register").render()

    # In a Jinja2 template
    {{ validator }}
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, Optional, Union

from jsvalidation.core.config import get_config
from jsvalidation.engine.template import ViewFactory, get_view_factory
from jsvalidation.javascript.validator_handler import ValidatorHandler


class PropertyNotFoundError(KeyError):
    """Raised when reading an unknown validator property."""
    pass


class JavascriptValidator:
    """
    Client validator for one form.

    Options:
        selector: CSS selector of the validated form ("form")
        view: View rendering the script ("jsvalidation::bootstrap")
        remote: Include AJAX rules (True)
        ignore: Elements the plugin skips (None keeps the plugin default)
    """

    def __init__(
        self,
        handler: ValidatorHandler,
        options: Optional[Dict[str, Any]] = None,
        view_factory: Optional[ViewFactory] = None,
    ) -> None:
        options = options or {}
        self.handler = handler
        self._view_factory = view_factory
        self._selector: str = options.get("selector") or "form"
        self._view: str = options.get("view") or "jsvalidation::bootstrap"
        self._remote: bool = bool(options.get("remote", True))
        self._ignore: Optional[str] = options.get("ignore")

    def get_view_factory(self) -> ViewFactory:
        return self._view_factory or get_view_factory()

    def render(self, view: Optional[str] = None, selector: Optional[str] = None) -> str:
        """Render the validation script."""
        if selector is not None:
            self._selector = selector
        if view is not None:
            self._view = view

        config = get_config()
        return self.get_view_factory().render(self._view, {
            "validator": self.get_view_data(),
            "focus_on_error": config.get_bool("focus_on_error", True),
            "duration_animate": config.get_int("duration_animate", 1000),
        })

    def to_dict(self) -> Dict[str, Any]:
        """Rule map in the plugin's wire format."""
        return self.get_view_data()

    def get_view_data(self) -> Dict[str, Any]:
        self.handler.set_remote(self._remote)
        data = self.handler.validation_data()
        data["selector"] = self._selector

        if self._ignore is not None:
            data["ignore"] = self._ignore

        return data

    def __str__(self) -> str:
        return self.render()

    def __html__(self) -> str:
        """Jinja2/MarkupSafe hook: the script is output unescaped."""
        return self.render()

    def __getitem__(self, name: str) -> Any:
        data = self.get_view_data()
        if name not in data:
            raise PropertyNotFoundError(name)
        return data[name]

    # Fluent configuration

    def selector(self, selector: str) -> "JavascriptValidator":
        self._selector = selector
        return self

    def ignore(self, ignore: Optional[str]) -> "JavascriptValidator":
        self._ignore = ignore
        return self

    def view(self, view: str) -> "JavascriptValidator":
        self._view = view
        return self

    def remote(self, enabled: bool = True) -> "JavascriptValidator":
        self._remote = enabled
        return self

    def sometimes(self, attribute: Union[str, Iterable[str]], rules: Any) -> "JavascriptValidator":
        """Add rules always checked by the server through AJAX."""
        self.handler.sometimes(attribute, rules)
        return self

    def __repr__(self) -> str:
        return f"<JavascriptValidator selector={self._selector!r} view={self._view!r}>"
