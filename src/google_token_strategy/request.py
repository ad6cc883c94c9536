"""
Token lookup across the body, query string and headers of a request.
"""
from __future__ import annotations

import re
from typing import Any, Dict, Mapping, Optional, Protocol

from starlette.exceptions import HTTPException
from starlette.formparsers import MultiPartException
from starlette.requests import Request


AUTHORIZATION_HEADER = "Authorization"

_BEARER_RE = re.compile(r"Bearer (.*)")
_FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


class TokenRequest(Protocol):
    def get_body_field(self, name: str) -> Optional[str]:
        ...

    def get_query_field(self, name: str) -> Optional[str]:
        ...

    def get_header_field(self, name: str) -> Optional[str]:
        ...


class RequestFields:
    """Read-only view over the body, query and header fields of one request.

    Any of the three containers may be missing. Empty strings and non-string
    values are reported as absent.
    """

    def __init__(
        self,
        body: Mapping[str, Any] | None = None,
        query: Mapping[str, Any] | None = None,
        headers: Mapping[str, Any] | None = None,
    ) -> None:
        self._body: Dict[str, Any] = dict(body or {})
        self._query: Dict[str, Any] = dict(query or {})
        self._headers: Dict[str, Any] = dict(headers or {})
        self._lower_headers: Dict[str, Any] = {}
        for key, value in self._headers.items():
            self._lower_headers.setdefault(key.lower(), value)

    def get_body_field(self, name: str) -> Optional[str]:
        return _present(self._body.get(name))

    def get_query_field(self, name: str) -> Optional[str]:
        return _present(self._query.get(name))

    def get_header_field(self, name: str) -> Optional[str]:
        return _present(self._headers.get(name)) or _present(self._lower_headers.get(name.lower()))

    def __repr__(self) -> str:
        # Field values are credentials; only show which keys are present
        return (
            f"RequestFields(body={sorted(self._body)}, query={sorted(self._query)}, "
            f"headers={sorted(self._headers)})"
        )


def _present(value: Any) -> Optional[str]:
    if isinstance(value, str) and value:
        return value
    return None


def parse_bearer_token(request: TokenRequest) -> Optional[str]:
    """Return the token from an RFC 6750 ``Authorization: Bearer`` header.

    The header name is matched case-insensitively.
    """
    header_value = request.get_header_field(AUTHORIZATION_HEADER)
    if not header_value:
        return None
    match = _BEARER_RE.search(header_value)
    if not match:
        return None
    return match.group(1) or None


def resolve_token(request: TokenRequest, field: str) -> Optional[str]:
    """Look up ``field`` in the body, query, then headers of ``request``.

    First match wins. When the field is nowhere to be found, the token from a
    Bearer ``Authorization`` header is returned instead, whatever ``field`` is.
    """
    return (
        request.get_body_field(field)
        or request.get_query_field(field)
        or request.get_header_field(field)
        or parse_bearer_token(request)
    )


async def from_starlette(request: Request) -> RequestFields:
    """Build :class:`RequestFields` from a Starlette/FastAPI request."""
    body: Dict[str, Any] = {}
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("application/json"):
        try:
            payload = await request.json()
        except ValueError:
            payload = None
        if isinstance(payload, dict):
            body = payload
    elif content_type.startswith(_FORM_CONTENT_TYPES):
        try:
            form = await request.form()
        except MultiPartException as exc:
            raise HTTPException(status_code=400, detail=f"Malformed form body: {exc.message}") from exc
        body = {key: value for key, value in form.items() if isinstance(value, str)}

    return RequestFields(
        body=body,
        query=dict(request.query_params),
        headers=dict(request.headers),
    )
