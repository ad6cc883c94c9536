from __future__ import annotations

import logging
from typing import Any, Dict

import httpx
from authlib.common.errors import AuthlibBaseError
from authlib.common.security import generate_token
from authlib.integrations.httpx_client import AsyncOAuth2Client
from authlib.oauth2.rfc6749.parameters import prepare_grant_uri

from google_token_strategy.errors import InternalOAuthError
from google_token_strategy.settings import StrategyOptions


logger = logging.getLogger(__name__)


class OAuth2Client:
    """Generic OAuth 2.0 helper backed by authlib's httpx client.

    Holds the client credentials and the authorization/token endpoints, and
    performs GET requests authenticated with an access token.
    """

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        *,
        authorization_url: str,
        token_url: str,
        use_authorization_header_for_get: bool = True,
        timeout: float = 10.0,
    ) -> None:
        self._client_id = client_id
        self._client_secret = client_secret
        self._authorization_url = authorization_url
        self._token_url = token_url
        self._use_authorization_header_for_get = use_authorization_header_for_get
        self._timeout = timeout

    @classmethod
    def from_options(cls, options: StrategyOptions, **kwargs: Any) -> "OAuth2Client":
        return cls(
            options.client_id,
            options.client_secret,
            authorization_url=str(options.authorization_url),
            token_url=str(options.token_url),
            timeout=options.timeout,
            **kwargs,
        )

    @property
    def uses_authorization_header_for_get(self) -> bool:
        return self._use_authorization_header_for_get

    async def get(self, url: str, access_token: str) -> httpx.Response:
        """GET ``url`` with ``access_token``.

        The token goes in an ``Authorization: Bearer`` header, or in the
        ``access_token`` query parameter when header auth for GET is off.
        Raises ``httpx.HTTPStatusError`` for non-2xx responses.
        """
        placement = "header" if self._use_authorization_header_for_get else "uri"
        token = {"access_token": access_token, "token_type": "Bearer"}
        async with AsyncOAuth2Client(
            client_id=self._client_id,
            client_secret=self._client_secret,
            token=token,
            token_placement=placement,
            timeout=self._timeout,
        ) as client:
            resp = await client.get(url)
        resp.raise_for_status()
        return resp

    def authorization_url(
        self,
        *,
        redirect_uri: str,
        scope: str | None = None,
        state: str | None = None,
        **extra_params: Any,
    ) -> tuple[str, str]:
        """Build the authorization-code redirect URL. Returns ``(url, state)``."""
        state = state or generate_token(48)
        url = prepare_grant_uri(
            self._authorization_url,
            self._client_id,
            "code",
            redirect_uri=redirect_uri,
            scope=scope,
            state=state,
            **extra_params,
        )
        return url, state

    async def exchange_code(self, *, code: str, redirect_uri: str | None = None) -> Dict[str, Any]:
        """Exchange an authorization code at the token endpoint."""
        try:
            async with AsyncOAuth2Client(
                client_id=self._client_id,
                client_secret=self._client_secret,
                token_endpoint_auth_method="client_secret_post",
                redirect_uri=redirect_uri,
                timeout=self._timeout,
            ) as client:
                token = await client.fetch_token(
                    self._token_url,
                    grant_type="authorization_code",
                    code=code,
                )
        except (httpx.HTTPError, AuthlibBaseError) as exc:
            logger.warning("token exchange failed", extra={"token_url": self._token_url})
            raise InternalOAuthError("Failed to obtain access token", exc) from exc
        return dict(token)
