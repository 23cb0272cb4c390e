"""
JsValidation Factory
====================

Entry point creating `JavascriptValidator` instances from rules, form
requests or existing validators.

Example:
    import jsvalidation

    validator = jsvalidation.make(
        {"email": "required|email|unique:users", "password": "required|min:8|confirmed"},
        attributes={"email": "e-mail"},
    )

    # Form request class, bound to the current request and session
    validator = JsValidatorFactory(request=request).form_request(StoreUserRequest, "#register")

    html = validator.render()
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Optional, Sequence, Tuple, Type, Union

from jsvalidation.core.config import get_config
from jsvalidation.engine.template import ViewFactory
from jsvalidation.javascript.javascript_validator import JavascriptValidator
from jsvalidation.javascript.message_parser import MessageParser
from jsvalidation.javascript.rule_parser import RuleParser
from jsvalidation.javascript.validator_handler import ValidatorHandler
from jsvalidation.remote.form_request import JsValidationFormRequest
from jsvalidation.support.delegated_validator import DelegatedValidator, ValidationRuleParserProxy
from jsvalidation.support.rule_lists import ASTERISK, FORM_REQUEST_RULE_NAME
from jsvalidation.utils.helpers import set_nested, snake_case
from jsvalidation.utils.logger import get_logger
from jsvalidation.validation.factory import Factory, get_validation_factory
from jsvalidation.validation.form import FormRequest
from jsvalidation.validation.validator import Validator

if TYPE_CHECKING:
    from jsvalidation.core.request import Request
    from jsvalidation.core.session import Session
    from jsvalidation.security.encrypter import Encrypter

logger = get_logger("jsvalidation")

# Pseudo-field carrying the whole-form AJAX rule
FORM_REQUEST_FIELD = "proengsoft_jsvalidation"

FormRequestTarget = Union[FormRequest, Type[FormRequest], Tuple[Type[FormRequest], Sequence[Any]]]


def format_implicit_attribute(attribute: str) -> str:
    """Display name of a wildcard attribute built from fake data."""
    return snake_case(attribute.replace(ASTERISK, "*")).replace("_", " ")


class JsValidatorFactory:
    """
    Creates JavaScript validators.

    Options default to the `jsvalidation` configuration: `view`,
    `form_selector`, `disable_remote_validation`, `ignore` and `escape`.
    """

    def __init__(
        self,
        options: Optional[Dict[str, Any]] = None,
        request: Optional["Request"] = None,
        session: Optional["Session"] = None,
        encrypter: Optional["Encrypter"] = None,
        validation_factory: Optional[Factory] = None,
        view_factory: Optional[ViewFactory] = None,
    ) -> None:
        self.request = request
        self.session = session
        self.encrypter = encrypter
        self.validation_factory = validation_factory
        self.view_factory = view_factory
        self.set_options(options or {})

    def set_options(self, options: Dict[str, Any]) -> None:
        config = get_config()
        self.options = {
            "disable_remote_validation": bool(
                options.get("disable_remote_validation", config.get_bool("disable_remote_validation"))
            ),
            "view": options.get("view") or config.get("view") or "jsvalidation::bootstrap",
            "form_selector": options.get("form_selector") or config.get("form_selector") or "form",
            "ignore": options.get("ignore", config.get("ignore")),
            "escape": bool(options.get("escape", config.get_bool("escape"))),
        }

    def get_validation_factory(self) -> Factory:
        return self.validation_factory or get_validation_factory(self.request)

    # =========================================================================
    # Validators
    # =========================================================================

    def make(
        self,
        rules: Dict[str, Any],
        messages: Optional[Dict[str, Any]] = None,
        attributes: Optional[Dict[str, str]] = None,
        selector: Optional[str] = None,
    ) -> JavascriptValidator:
        """Create a JavaScript validator from rules."""
        validator = self.get_validator_instance(rules, messages, attributes)
        return self.validator(validator, selector)

    def get_validator_instance(
        self,
        rules: Dict[str, Any],
        messages: Optional[Dict[str, Any]] = None,
        attributes: Optional[Dict[str, str]] = None,
    ) -> Validator:
        attributes = attributes or {}
        data = self.get_validation_data(rules, attributes)

        validator = self.get_validation_factory().make(data, rules, messages or {}, attributes)
        validator.add_custom_attributes(attributes)
        validator.implicit_attributes_formatter = format_implicit_attribute
        return validator

    @staticmethod
    def get_validation_data(rules: Dict[str, Any], attributes: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
        """
        Fake data keeping wildcard rules from being dropped.

        Every `*` becomes the `__asterisk__` placeholder so wildcard
        attributes expand to exactly one attribute.
        """
        keys = list(attributes or {})
        keys += [key for key in rules if key and "*" in key]

        data: Dict[str, Any] = {}
        for key in keys:
            set_nested(data, key.replace("*", ASTERISK), True)
        return data

    def form_request(self, form_request: FormRequestTarget, selector: Optional[str] = None) -> JavascriptValidator:
        """
        Create a JavaScript validator from a form request.

        Args:
            form_request: Instance, class, or `(class, constructor args)`
            selector: CSS selector of the form
        """
        if not isinstance(form_request, FormRequest):
            form_request = self.create_form_request(form_request)

        if isinstance(form_request, JsValidationFormRequest):
            return self._new_form_request_validator(form_request, selector)

        return self._old_form_request_validator(form_request, selector)

    def _new_form_request_validator(
        self,
        form_request: JsValidationFormRequest,
        selector: Optional[str],
    ) -> JavascriptValidator:
        # Fields keep an always-valid client rule so the plugin tracks them;
        # the form-request rule validates everything through one AJAX call.
        rules: Dict[str, Any] = {key: "proengsoft_noop" for key in form_request.rules()}
        rules[FORM_REQUEST_FIELD] = FORM_REQUEST_RULE_NAME

        return self.validator(self.get_validator_instance(rules), selector)

    def _old_form_request_validator(self, form_request: FormRequest, selector: Optional[str]) -> JavascriptValidator:
        validator = self.get_validator_instance(
            form_request.rules(),
            form_request.messages(),
            form_request.attributes(),
        )
        js_validator = self.validator(validator, selector)

        hook = getattr(form_request, "with_js_validator", None)
        if callable(hook):
            hook(js_validator)

        return js_validator

    @staticmethod
    def parse_form_request_name(target: Any) -> Tuple[Type[FormRequest], Sequence[Any]]:
        if isinstance(target, (tuple, list)):
            params = target[1] if len(target) > 1 and target[1] else ()
            return target[0], params
        return target, ()

    def create_form_request(self, target: Any) -> FormRequest:
        """Build a form request class, bound to the current request and session."""
        cls, params = self.parse_form_request_name(target)
        form_request = cls(**params) if isinstance(params, dict) else cls(*params)

        if self.request is not None:
            form_request.request = self.request
            form_request.query = self.request.query
            if self.request.has_session():
                form_request.set_session(self.request.session)
        if form_request.session is None and self.session is not None:
            form_request.set_session(self.session)

        return form_request

    def validator(self, validator: Validator, selector: Optional[str] = None) -> JavascriptValidator:
        """Create a JavaScript validator from a validator instance."""
        return self.js_validator(validator, selector)

    def js_validator(self, validator: Validator, selector: Optional[str] = None) -> JavascriptValidator:
        remote = not self.options["disable_remote_validation"]
        selector = self.options["form_selector"] if selector is None else selector

        delegated = DelegatedValidator(validator, ValidationRuleParserProxy(validator.get_data()))
        rules = RuleParser(delegated, self.get_session_token())
        messages = MessageParser(delegated, self.options["escape"])

        logger.debug("Creating JavaScript validator", selector=selector, remote=remote)

        return JavascriptValidator(
            ValidatorHandler(rules, messages),
            {
                "view": self.options["view"],
                "selector": selector,
                "remote": remote,
                "ignore": self.options["ignore"],
            },
            view_factory=self.view_factory,
        )

    def get_session_token(self) -> Optional[str]:
        """Session CSRF token, encrypted when an encrypter is configured."""
        session = self.session
        if session is None and self.request is not None and self.request.has_session():
            session = self.request.session

        token = session.token() if session is not None else None

        if token is not None and self.encrypter is not None:
            token = self.encrypter.encrypt(token)

        return token


# Convenience functions

_default_factory: Optional[JsValidatorFactory] = None


def configure(options: Optional[Dict[str, Any]] = None, **kwargs: Any) -> JsValidatorFactory:
    """
    Configure the default factory.

    Args:
        options: Factory options
        **kwargs: request, session, encrypter, validation_factory, view_factory
    """
    global _default_factory
    _default_factory = JsValidatorFactory(options, **kwargs)
    return _default_factory


def get_factory() -> JsValidatorFactory:
    global _default_factory
    if _default_factory is None:
        _default_factory = JsValidatorFactory()
    return _default_factory


def make(
    rules: Dict[str, Any],
    messages: Optional[Dict[str, Any]] = None,
    attributes: Optional[Dict[str, str]] = None,
    selector: Optional[str] = None,
) -> JavascriptValidator:
    return get_factory().make(rules, messages, attributes, selector)


def form_request(target: FormRequestTarget, selector: Optional[str] = None) -> JavascriptValidator:
    return get_factory().form_request(target, selector)


def validator(instance: Validator, selector: Optional[str] = None) -> JavascriptValidator:
    return get_factory().validator(instance, selector)
