"""
JsValidation Response Objects
=============================

HTTP responses sent by the remote validation endpoint, serialised
with orjson and sent through the ASGI interface.
"""

from __future__ import annotations

from http import HTTPStatus
from typing import Any, Callable, Coroutine, Dict, List, Optional

import orjson


HTTP_STATUS_PHRASES = {s.value: s.phrase for s in HTTPStatus}


class Response:
    """
    Base HTTP response.

    Example:
        return Response("Not Found", status_code=404)
    """

    media_type: str = "text/plain"
    charset: str = "utf-8"

    def __init__(
        self,
        content: Any = None,
        status_code: int = 200,
        headers: Optional[Dict[str, str]] = None,
        media_type: Optional[str] = None,
    ) -> None:
        self.status_code = status_code
        self.headers: Dict[str, str] = dict(headers or {})

        if media_type:
            self.media_type = media_type

        self.body = self._render_content(content)

        if "content-type" not in {k.lower() for k in self.headers}:
            content_type = self.media_type
            if content_type.startswith("text/"):
                content_type += f"; charset={self.charset}"
            self.headers["Content-Type"] = content_type

        self.headers["Content-Length"] = str(len(self.body))

    def _render_content(self, content: Any) -> bytes:
        if content is None:
            return b""
        if isinstance(content, bytes):
            return content
        return str(content).encode(self.charset)

    def _get_headers(self) -> List[tuple]:
        return [(k.lower().encode(), v.encode()) for k, v in self.headers.items()]

    async def send(
        self,
        send: Callable[[Dict[str, Any]], Coroutine[Any, Any, None]],
    ) -> None:
        """Send response via ASGI interface."""
        await send({
            "type": "http.response.start",
            "status": self.status_code,
            "headers": self._get_headers(),
        })
        await send({
            "type": "http.response.body",
            "body": self.body,
        })

    @property
    def status_phrase(self) -> str:
        return HTTP_STATUS_PHRASES.get(self.status_code, "Unknown")

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.status_code} {self.status_phrase}>"


class HTMLResponse(Response):
    """HTML content response."""

    media_type = "text/html"


class JSONResponse(Response):
    """
    JSON content response.

    Example:
        return JSONResponse(True)
        return JSONResponse({"email": ["The email has already been taken."]})
    """

    media_type = "application/json"

    def __init__(
        self,
        content: Any = None,
        status_code: int = 200,
        headers: Optional[Dict[str, str]] = None,
    ) -> None:
        self.data = content
        super().__init__(content, status_code, headers)

    def _render_content(self, content: Any) -> bytes:
        return orjson.dumps(content)

    def json(self) -> Any:
        """Decoded response payload."""
        return orjson.loads(self.body)


class HttpResponseException(Exception):
    """
    Exception carrying a ready-made response.

    Raised to abort request handling and answer immediately, e.g.
    from inside a validation rule during remote validation.
    """

    def __init__(self, response: Response) -> None:
        super().__init__(f"HTTP response exception ({response.status_code})")
        self.response = response

    def get_response(self) -> Response:
        return self.response
