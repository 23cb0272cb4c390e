"""
JsValidation CSRF Verification
==============================

Session-bound CSRF token verification for state-changing requests,
including the AJAX requests issued by remote validation rules.

The token is looked up in this order:
1. `_token` input field
2. `X-CSRF-TOKEN` header (plain token)
3. `X-XSRF-TOKEN` header (token encrypted with `Encrypter`)

Usage:
    app = chain([VerifyCsrfToken(encrypter), RemoteValidationMiddleware()], endpoint)

    # In templates
    <form method="POST">
        {{ csrf_field(session) }}
    </form>
"""

from __future__ import annotations

import hmac
from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Optional

from jsvalidation.core.middleware import Middleware
from jsvalidation.core.response import JSONResponse
from jsvalidation.security.encrypter import DecryptError, Encrypter
from jsvalidation.utils.logger import get_logger

if TYPE_CHECKING:
    from jsvalidation.core.request import Request
    from jsvalidation.core.response import Response
    from jsvalidation.core.session import Session

logger = get_logger("jsvalidation.csrf")


@dataclass
class CSRFConfig:
    """CSRF verification configuration."""
    token_name: str = "_token"
    header_name: str = "X-CSRF-TOKEN"
    encrypted_header_name: str = "X-XSRF-TOKEN"
    exempt_methods: tuple = ("GET", "HEAD", "OPTIONS")
    failure_status: int = 419
    failure_message: str = "CSRF token mismatch."


class VerifyCsrfToken(Middleware):
    """
    CSRF verification middleware.

    Requires the host application to attach a `Session` to the request.

    Example:
        middleware = VerifyCsrfToken(Encrypter(secret), exempt_paths=["/webhooks"])
    """

    def __init__(
        self,
        encrypter: Optional[Encrypter] = None,
        config: Optional[CSRFConfig] = None,
        exempt_paths: Optional[List[str]] = None,
    ) -> None:
        self.encrypter = encrypter
        self.config = config or CSRFConfig()
        self.exempt_paths = exempt_paths or []

    async def before(self, request: "Request") -> Optional["Response"]:
        if request.method in self.config.exempt_methods:
            return None

        for path in self.exempt_paths:
            if request.path.startswith(path):
                return None

        if request.has_session() and await self.tokens_match(request):
            return None

        logger.warning("CSRF token mismatch", method=request.method, path=request.path)
        return JSONResponse(
            {"message": self.config.failure_message},
            status_code=self.config.failure_status,
        )

    async def tokens_match(self, request: "Request") -> bool:
        """Compare the submitted token with the session token."""
        token = await self.get_token_from_request(request)
        session_token = request.session.token()
        return bool(token) and hmac.compare_digest(str(token).encode("utf-8"), session_token.encode("utf-8"))

    async def get_token_from_request(self, request: "Request") -> Optional[str]:
        """Extract the submitted token, decrypting the XSRF header."""
        data = await request.input()
        token = data.get(self.config.token_name) or request.headers.get(self.config.header_name)

        encrypted = request.headers.get(self.config.encrypted_header_name)
        if not token and encrypted and self.encrypter is not None:
            try:
                token = self.encrypter.decrypt(encrypted)
            except DecryptError:
                token = None

        return token


def csrf_field(session: "Session", name: str = "_token") -> str:
    """Hidden input carrying the session CSRF token (template helper)."""
    return f'<input type="hidden" name="{name}" value="{session.token()}">'


def csrf_meta(session: "Session") -> str:
    """Meta tag carrying the session CSRF token for JavaScript access."""
    return f'<meta name="csrf-token" content="{session.token()}">'
