"""
JsValidation Request Object
===========================

ASGI request wrapper used by the remote validation endpoint.

Body data is lazily parsed. Form field names in bracket notation
(`user[address][city]`, `tags[]`) are nested the way browsers and
the client plugin submit them, so dotted validation attributes
resolve against the parsed input.
"""

from __future__ import annotations

import mimetypes
import re
from dataclasses import dataclass, field
from http.cookies import SimpleCookie
from pathlib import PurePath
from typing import (
    TYPE_CHECKING,
    Any,
    Callable,
    Coroutine,
    Dict,
    List,
    Optional,
    Tuple,
    Union,
)
from urllib.parse import parse_qsl

import orjson

from jsvalidation.utils.helpers import dotted_name, get_nested, has_nested

if TYPE_CHECKING:
    from jsvalidation.core.session import Session


@dataclass
class UploadedFile:
    """
    Uploaded file from multipart form data.

    Attributes:
        filename: Original filename
        content_type: MIME type sent by the client
        size: File size in bytes
        content: File content
    """
    filename: str
    content_type: str = "application/octet-stream"
    size: int = 0
    content: bytes = b""
    error: bool = False

    def is_valid(self) -> bool:
        """Check the upload completed."""
        return not self.error

    @property
    def extension(self) -> str:
        """Client-provided extension, lowercase, without dot."""
        return PurePath(self.filename).suffix.lstrip(".").lower()

    def guess_extension(self) -> str:
        """Extension derived from the MIME type, falling back to the filename."""
        guessed = mimetypes.guess_extension(self.content_type or "")
        if guessed:
            return guessed.lstrip(".").lower()
        return self.extension

    @property
    def kilobytes(self) -> float:
        return self.size / 1024

    def read(self) -> bytes:
        return self.content


@dataclass
class QueryParams:
    """Query string parameters (first value wins for `get`)."""
    _data: List[Tuple[str, str]] = field(default_factory=list)

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        for name, value in self._data:
            if name == key:
                return value
        return default

    def get_list(self, key: str) -> List[str]:
        return [value for name, value in self._data if name == key]

    def __contains__(self, key: str) -> bool:
        return any(name == key for name, _ in self._data)

    def to_dict(self) -> Dict[str, Any]:
        """Nested dictionary following bracket notation."""
        return nest_fields(self._data)


class Headers:
    """Case-insensitive HTTP headers container."""

    def __init__(self, raw_headers: List[tuple]) -> None:
        self._headers: Dict[str, str] = {}

        for key, value in raw_headers:
            if isinstance(key, bytes):
                key = key.decode("latin-1")
            if isinstance(value, bytes):
                value = value.decode("latin-1")
            self._headers[key.lower()] = value

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self._headers.get(key.lower(), default)

    def __getitem__(self, key: str) -> str:
        return self._headers[key.lower()]

    def __contains__(self, key: str) -> bool:
        return key.lower() in self._headers

    def to_dict(self) -> Dict[str, str]:
        return self._headers.copy()


def nest_fields(pairs: List[Tuple[str, Any]]) -> Dict[str, Any]:
    """
    Nest flat form fields following bracket notation.

    Example:
        >>> nest_fields([("user[name]", "x"), ("tags[]", "a"), ("tags[]", "b")])
        {'user': {'name': 'x'}, 'tags': ['a', 'b']}
    """
    result: Dict[str, Any] = {}

    for name, value in pairs:
        if name.endswith("[]"):
            path = dotted_name(name[:-2])
            existing = get_nested(result, path)
            if isinstance(existing, list):
                existing.append(value)
                continue
            value = [value]
        else:
            path = dotted_name(name)

        current = result
        keys = path.split(".")
        for key in keys[:-1]:
            if not isinstance(current.get(key), dict):
                current[key] = {}
            current = current[key]
        current[keys[-1]] = value

    return result


class Request:
    """
    HTTP request created from an ASGI scope.

    Example:
        async def endpoint(request: Request):
            data = await request.input()
            if await request.has("_jsvalidation"):
                ...
    """

    __slots__ = (
        "_scope",
        "_receive",
        "_body",
        "_json",
        "_form",
        "_files",
        "method",
        "path",
        "query_string",
        "query",
        "headers",
        "cookies",
        "state",
        "_session",
    )

    def __init__(
        self,
        scope: Dict[str, Any],
        receive: Optional[Callable[[], Coroutine[Any, Any, Dict[str, Any]]]] = None,
        session: Optional["Session"] = None,
    ) -> None:
        self._scope = scope
        self._receive = receive
        self._body: Optional[bytes] = None
        self._json: Optional[Any] = None
        self._form: Optional[Dict[str, Any]] = None
        self._files: Optional[Dict[str, Any]] = None

        self.method: str = scope.get("method", "GET").upper()
        self.path: str = scope.get("path", "/")
        self.query_string: str = scope.get("query_string", b"").decode("utf-8", errors="replace")
        self.query = QueryParams(_data=parse_qsl(self.query_string, keep_blank_values=True))
        self.headers = Headers(scope.get("headers", []))

        self.cookies: Dict[str, str] = {}
        cookie_header = self.headers.get("cookie", "")
        if cookie_header:
            cookie = SimpleCookie()
            cookie.load(cookie_header)
            self.cookies = {key: morsel.value for key, morsel in cookie.items()}

        # Middleware data passing
        self.state: Dict[str, Any] = {}
        self._session = session

    async def body(self) -> bytes:
        """Read the request body once and cache it."""
        if self._body is not None:
            return self._body

        chunks: List[bytes] = []
        if self._receive is not None:
            while True:
                message = await self._receive()
                if message["type"] == "http.request":
                    chunk = message.get("body", b"")
                    if chunk:
                        chunks.append(chunk)
                    if not message.get("more_body", False):
                        break
                elif message["type"] == "http.disconnect":
                    raise RuntimeError("Client disconnected")

        self._body = b"".join(chunks)
        return self._body

    async def json(self) -> Any:
        """Parse body as JSON."""
        if self._json is None:
            body = await self.body()
            self._json = orjson.loads(body) if body else None
        return self._json

    async def form(self) -> Dict[str, Any]:
        """
        Parse body as form data.

        Supports application/x-www-form-urlencoded and multipart/form-data.
        """
        if self._form is not None:
            return self._form

        content_type = self.headers.get("content-type", "")
        body = await self.body()

        if "application/x-www-form-urlencoded" in content_type:
            self._form = nest_fields(parse_qsl(body.decode("utf-8", errors="replace"), keep_blank_values=True))
        elif "multipart/form-data" in content_type:
            fields, files = self._parse_multipart(body, content_type)
            self._form = nest_fields(fields)
            self._files = nest_fields(files)
        else:
            self._form = {}

        return self._form

    async def files(self) -> Dict[str, Any]:
        """Uploaded files, nested like form fields."""
        if self._files is None:
            await self.form()
        return self._files or {}

    async def input(self) -> Dict[str, Any]:
        """
        All input: query string, then body (form fields and files, or JSON).

        Body values override query values with the same name.
        """
        data = self.query.to_dict()

        if "application/json" in self.headers.get("content-type", ""):
            payload = await self.json()
            if isinstance(payload, dict):
                data.update(payload)
            return data

        data.update(await self.form())
        data.update(await self.files())
        return data

    async def has(self, key: str) -> bool:
        """Check whether the input contains a (dotted) key."""
        return has_nested(await self.input(), key)

    def _parse_multipart(
        self,
        body: bytes,
        content_type: str,
    ) -> Tuple[List[Tuple[str, str]], List[Tuple[str, UploadedFile]]]:
        """Parse multipart form data."""
        boundary_match = re.search(r"boundary=([^;\s]+)", content_type)
        if not boundary_match:
            return [], []

        boundary = boundary_match.group(1).strip('"').encode()
        fields: List[Tuple[str, str]] = []
        files: List[Tuple[str, UploadedFile]] = []

        for part in body.split(b"--" + boundary)[1:-1]:
            try:
                headers_end = part.index(b"\r\n\r\n")
            except ValueError:
                continue

            headers_raw = part[:headers_end].decode("utf-8", errors="replace")
            content = part[headers_end + 4:].rstrip(b"\r\n")

            name_match = re.search(r'name="([^"]+)"', headers_raw)
            if not name_match:
                continue
            filename_match = re.search(r'filename="([^"]*)"', headers_raw)
            type_match = re.search(r"Content-Type:\s*([^\r\n]+)", headers_raw, re.I)

            if filename_match:
                files.append((name_match.group(1), UploadedFile(
                    filename=filename_match.group(1),
                    content_type=type_match.group(1) if type_match else "application/octet-stream",
                    size=len(content),
                    content=content,
                    error=not filename_match.group(1),
                )))
            else:
                fields.append((name_match.group(1), content.decode("utf-8", errors="replace")))

        return fields, files

    @property
    def session(self) -> "Session":
        """Get session object (attached by the host application)."""
        if self._session is None:
            raise RuntimeError("Session not available on this request")
        return self._session

    @session.setter
    def session(self, session: "Session") -> None:
        self._session = session

    def has_session(self) -> bool:
        return self._session is not None

    @property
    def is_ajax(self) -> bool:
        return self.headers.get("x-requested-with", "").lower() == "xmlhttprequest"

    def __repr__(self) -> str:
        return f"<Request {self.method} {self.path}>"


def build_request(
    method: str = "POST",
    path: str = "/",
    data: Optional[Union[Dict[str, Any], List[Tuple[str, Any]]]] = None,
    headers: Optional[Dict[str, str]] = None,
    session: Optional["Session"] = None,
) -> Request:
    """
    Build a form-encoded request without an ASGI server.

    Example:
        request = build_request("POST", "/users", {"email": "a@b.c"})
    """
    from urllib.parse import urlencode

    items = list(data.items()) if isinstance(data, dict) else list(data or [])
    body = urlencode(items).encode("utf-8")

    raw_headers = [(b"content-type", b"application/x-www-form-urlencoded")]
    for key, value in (headers or {}).items():
        raw_headers.append((key.lower().encode("latin-1"), value.encode("latin-1")))

    sent = False

    async def receive() -> Dict[str, Any]:
        nonlocal sent
        if sent:
            return {"type": "http.disconnect"}
        sent = True
        return {"type": "http.request", "body": body, "more_body": False}

    path, _, query_string = path.partition("?")
    scope = {
        "type": "http",
        "method": method,
        "path": path,
        "query_string": query_string.encode("utf-8"),
        "headers": raw_headers,
    }
    return Request(scope, receive, session=session)
