"""
JsValidation Session
====================

Dict-like session carrying the CSRF token that remote validation
requests send back to the server.

The host application owns session storage; it creates a `Session`
from its stored data and attaches it to the request.

Example:
    session = Session("abc123", stored_data)
    request.session = session

    token = session.token()
"""

from __future__ import annotations

import secrets
from typing import Any, Dict, Iterator, Optional

TOKEN_KEY = "_token"


class Session:
    """
    Session object for storing user data.

    The CSRF token is created lazily on first access.
    """

    def __init__(
        self,
        session_id: str = "",
        data: Optional[Dict[str, Any]] = None,
    ) -> None:
        self._id = session_id
        self._data = data if data is not None else {}
        self._modified = False

    @property
    def id(self) -> str:
        """Get session ID."""
        return self._id

    @property
    def is_modified(self) -> bool:
        """Check if session was modified."""
        return self._modified

    def token(self) -> str:
        """Get the CSRF token, generating one if missing."""
        if not self._data.get(TOKEN_KEY):
            self.regenerate_token()
        return self._data[TOKEN_KEY]

    def regenerate_token(self) -> str:
        """Replace the CSRF token with a new random one."""
        self._data[TOKEN_KEY] = secrets.token_hex(20)
        self._modified = True
        return self._data[TOKEN_KEY]

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __setitem__(self, key: str, value: Any) -> None:
        self._data[key] = value
        self._modified = True

    def __contains__(self, key: str) -> bool:
        return key in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def pop(self, key: str, default: Any = None) -> Any:
        self._modified = True
        return self._data.pop(key, default)

    def to_dict(self) -> Dict[str, Any]:
        """Get session data as dict."""
        return dict(self._data)

    def __repr__(self) -> str:
        return f"<Session {self._id!r} keys={len(self._data)}>"
