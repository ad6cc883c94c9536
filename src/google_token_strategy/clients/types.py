from __future__ import annotations

from typing import Any, Dict, Protocol

import httpx


class OAuth2Transport(Protocol):
    async def get(self, url: str, access_token: str) -> httpx.Response:
        ...

    def authorization_url(
        self,
        *,
        redirect_uri: str,
        scope: str | None = None,
        state: str | None = None,
        **extra_params: Any,
    ) -> tuple[str, str]:
        ...

    async def exchange_code(self, *, code: str, redirect_uri: str | None = None) -> Dict[str, Any]:
        ...
