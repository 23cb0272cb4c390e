"""
JsValidation Middleware Base
============================

Middleware follows the "onion" model: each middleware wraps the next,
allowing pre-processing (`before`) and post-processing (`after`).

Architecture:
    Request → Middleware1.before → Middleware2.before → Handler
                                                            ↓
    Response ← Middleware1.after ← Middleware2.after ← Response
"""

from __future__ import annotations

from abc import ABC
from typing import TYPE_CHECKING, Any, Callable, Coroutine, Optional, Sequence

if TYPE_CHECKING:
    from jsvalidation.core.request import Request
    from jsvalidation.core.response import Response


Handler = Callable[["Request"], Coroutine[Any, Any, "Response"]]


class Middleware(ABC):
    """
    Base middleware class.

    Lifecycle:
        1. `before()` is called before the handler
        2. If `before()` returns a Response, processing stops
        3. The handler is called
        4. `after()` is called with request and response
    """

    async def before(self, request: "Request") -> Optional["Response"]:
        return None

    async def after(self, request: "Request", response: "Response") -> "Response":
        return response

    async def __call__(self, request: "Request", call_next: Handler) -> "Response":
        early_response = await self.before(request)
        if early_response is not None:
            return early_response

        response = await call_next(request)
        return await self.after(request, response)


def chain(middleware: Sequence[Middleware], handler: Handler) -> Handler:
    """
    Wrap a handler with middleware, first entry outermost.

    Example:
        app = chain([VerifyCsrfToken(enc), RemoteValidationMiddleware()], endpoint)
        response = await app(request)
    """
    wrapped = handler
    for item in reversed(middleware):
        wrapped = _bind(item, wrapped)
    return wrapped


def _bind(middleware: Middleware, call_next: Handler) -> Handler:
    async def handle(request: "Request") -> "Response":
        return await middleware(request, call_next)
    return handle
