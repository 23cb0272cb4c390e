"""
JsValidation Remote Resolver
============================

Validator construction for remote validation requests.

The resolver puts a `bail|jsvalidation:<validate_all>` rule on the remote
field ahead of every other rule. Running it validates only the attribute
the plugin asked about and aborts with the JSON answer.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List

from jsvalidation.remote.validator import EXTENSION_NAME, RemoteValidator
from jsvalidation.validation.factory import Factory
from jsvalidation.validation.messages import Translator
from jsvalidation.validation.validator import Validator


class RemoteRule:
    """
    `jsvalidation` extension running a `RemoteValidator`.

    Usable from both `passes()` and `passes_async()`.
    """

    def __init__(self, escape: bool = False) -> None:
        self.escape = escape

    def __call__(self, attribute: str, value: Any, parameters: List[str], validator: Validator) -> bool:
        RemoteValidator(validator, self.escape).validate(value, parameters)
        return True

    async def validate_async(
        self,
        attribute: str,
        value: Any,
        parameters: List[str],
        validator: Validator,
    ) -> bool:
        await RemoteValidator(validator, self.escape).validate_async(value, parameters)
        return True


class Resolver:
    """
    Example:
        resolver = Resolver(factory, escape=False)
        factory.resolver(resolver.resolver("_jsvalidation"))
        factory.extend("jsvalidation", resolver.validator_closure())
    """

    def __init__(self, factory: Factory, escape: bool = False) -> None:
        self.factory = factory
        self.escape = escape

    def resolver(self, field: str) -> Callable[..., Validator]:
        def resolve(
            translator: Translator,
            data: Dict[str, Any],
            rules: Dict[str, Any],
            messages: Dict[str, Any],
            attributes: Dict[str, str],
        ) -> Validator:
            return self.resolve(translator, data, rules, messages, attributes, field)

        return resolve

    def resolve(
        self,
        translator: Translator,
        data: Dict[str, Any],
        rules: Dict[str, Any],
        messages: Dict[str, Any],
        attributes: Dict[str, str],
        field: str,
    ) -> Validator:
        validate_all = data.get(f"{field}_validate_all", "false")
        rules = {field: f"bail|{EXTENSION_NAME}:{validate_all}", **rules}
        return self.create_validator(translator, data, rules, messages, attributes)

    def create_validator(
        self,
        translator: Translator,
        data: Dict[str, Any],
        rules: Dict[str, Any],
        messages: Dict[str, Any],
        attributes: Dict[str, str],
    ) -> Validator:
        validator = Validator(data, rules, messages, attributes, translator=translator)
        validator.presence_verifier = self.factory.presence_verifier
        return validator

    def validator_closure(self) -> RemoteRule:
        return RemoteRule(self.escape)
