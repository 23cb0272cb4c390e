"""
JsValidation Remote Validation Middleware
=========================================

Turns ordinary endpoints into remote validation endpoints.

When the request carries the remote field (`_jsvalidation`), validators
built for this request get the remote rule. The endpoint's own
validation then answers the plugin's AJAX call with `true` or the
attribute's messages before any other work is done.

Usage:
    app = chain([RemoteValidationMiddleware()], endpoint)

    async def endpoint(request):
        form = await StoreUserRequest.from_request(request)
        data = await form.validate_resolved()
        ...
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from jsvalidation.core.config import get_config
from jsvalidation.core.middleware import Handler, Middleware
from jsvalidation.core.response import HttpResponseException
from jsvalidation.remote.resolver import Resolver
from jsvalidation.remote.validator import EXTENSION_NAME
from jsvalidation.utils.logger import get_logger
from jsvalidation.validation.factory import STATE_KEY, Factory, get_validation_factory

if TYPE_CHECKING:
    from jsvalidation.core.request import Request
    from jsvalidation.core.response import Response

logger = get_logger("jsvalidation.remote")


class RemoteValidationMiddleware(Middleware):
    """
    Remote validation middleware.

    Args:
        factory: Validation factory to wrap (the request's factory by default)
        field: Remote field name (`remote_validation_field` setting)
        escape: HTML-escape answered messages (`escape` setting)
    """

    def __init__(
        self,
        factory: Optional[Factory] = None,
        field: Optional[str] = None,
        escape: Optional[bool] = None,
    ) -> None:
        config = get_config()
        self.factory = factory
        self.field = field or config.get("remote_validation_field", "_jsvalidation")
        self.escape = config.get_bool("escape") if escape is None else escape

    async def before(self, request: "Request") -> Optional["Response"]:
        if await request.has(self.field):
            self.wrap_validator(request)
        return None

    def wrap_validator(self, request: "Request") -> Factory:
        """Install a remote-aware validation factory on the request."""
        factory = (self.factory or get_validation_factory(request)).copy()

        resolver = Resolver(factory, self.escape)
        factory.resolver(resolver.resolver(self.field))
        factory.extend(EXTENSION_NAME, resolver.validator_closure())

        request.state[STATE_KEY] = factory
        logger.debug("Remote validation request", path=request.path)
        return factory

    async def __call__(self, request: "Request", call_next: Handler) -> "Response":
        try:
            return await super().__call__(request, call_next)
        except HttpResponseException as e:
            return e.get_response()
