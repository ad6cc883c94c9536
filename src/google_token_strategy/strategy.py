"""
Google access-token authentication strategy.

Authenticates a request by looking up an access token the client already
holds, fetching the matching profile from Google's userinfo endpoint and
handing tokens and profile to an application ``verify`` callback::

    def verify(access_token, refresh_token, profile, done):
        user = users.find_or_create(google_id=profile.id)
        done(None, user)

    strategy = GoogleTokenStrategy(
        StrategyOptions(clientID="123456789", clientSecret="shh-its-a-secret"),
        verify,
    )
    outcome = await strategy.authenticate(RequestFields(headers=request_headers))
"""
from __future__ import annotations

import asyncio
import inspect
import logging
from typing import Any, Callable, Optional, Tuple

import httpx
from authlib.common.errors import AuthlibBaseError

from google_token_strategy.clients import OAuth2Client, OAuth2Transport
from google_token_strategy.errors import InternalOAuthError, VerificationTimeout
from google_token_strategy.outcomes import Error, Failure, Outcome, Success
from google_token_strategy.profile import Profile, normalize_profile
from google_token_strategy.request import TokenRequest, parse_bearer_token, resolve_token
from google_token_strategy.settings import StrategyOptions


logger = logging.getLogger(__name__)

VerifyCallback = Callable[..., Any]


class VerifyDone:
    """One-shot completion handed to the verify callback as ``done``.

    The first call to ``done(error, user, info)`` settles the result; later
    calls are ignored.
    """

    def __init__(self) -> None:
        self._future: asyncio.Future[Tuple[Any, Any, Any]] = asyncio.get_running_loop().create_future()

    def __call__(self, error: Any = None, user: Any = None, info: Any = None) -> None:
        if self._future.done():
            logger.warning("verify callback completed more than once; ignoring")
            return
        self._future.set_result((error, user, info))

    @property
    def called(self) -> bool:
        return self._future.done()

    async def wait(self) -> Tuple[Any, Any, Any]:
        return await self._future


class GoogleTokenStrategy:
    name = "google-token"

    def __init__(
        self,
        options: StrategyOptions,
        verify: VerifyCallback,
        *,
        oauth2: Optional[OAuth2Transport] = None,
    ) -> None:
        if not callable(verify):
            raise TypeError("GoogleTokenStrategy requires a verify callback")
        self._options = options
        self._verify = verify
        self._oauth2 = oauth2 or OAuth2Client.from_options(options, use_authorization_header_for_get=False)

    @property
    def options(self) -> StrategyOptions:
        return self._options

    @property
    def oauth2(self) -> OAuth2Transport:
        return self._oauth2

    def lookup(self, request: TokenRequest, field: str) -> Optional[str]:
        return resolve_token(request, field)

    def parse_oauth2_token(self, request: TokenRequest) -> Optional[str]:
        return parse_bearer_token(request)

    async def user_profile(self, access_token: str) -> Profile:
        """Fetch and normalize the profile that ``access_token`` belongs to.

        Transport failures are wrapped in :class:`InternalOAuthError`; a body
        that is not JSON raises ``json.JSONDecodeError``.
        """
        profile_url = str(self._options.profile_url)
        try:
            resp = await self._oauth2.get(profile_url, access_token)
        except (httpx.HTTPError, AuthlibBaseError) as exc:
            raise InternalOAuthError("Failed to fetch user profile", exc) from exc
        return normalize_profile(resp.text)

    async def authenticate(self, request: TokenRequest) -> Outcome:
        """Run one authentication attempt and return its outcome."""
        access_token = self.lookup(request, self._options.access_token_field)
        refresh_token = self.lookup(request, self._options.refresh_token_field)

        if not access_token:
            logger.info("no access token on request", extra={"strategy": self.name, "outcome": "failure"})
            return Failure({"message": f"You should provide {self._options.access_token_field}"})

        try:
            profile = await self.user_profile(access_token)
        except (InternalOAuthError, ValueError) as exc:
            # httpx messages carry the request URL, which holds the token
            logger.warning(
                "failed to load user profile: %s",
                type(exc).__name__,
                extra={"strategy": self.name, "outcome": "error"},
            )
            return Error(exc)

        return await self._run_verify(request, access_token, refresh_token, profile)

    async def _run_verify(
        self,
        request: TokenRequest,
        access_token: str,
        refresh_token: Optional[str],
        profile: Profile,
    ) -> Outcome:
        done = VerifyDone()
        args: Tuple[Any, ...] = (access_token, refresh_token, profile, done)
        if self._options.pass_req_to_callback:
            args = (request, *args)

        timeout = self._options.verify_timeout
        if timeout is None:
            error, user, info = await self._call_verify(args, done)
        else:
            # One deadline covers the callback and the wait for done()
            try:
                error, user, info = await asyncio.wait_for(self._call_verify(args, done), timeout)
            except asyncio.TimeoutError:
                logger.error("verify callback timed out", extra={"strategy": self.name, "outcome": "error"})
                return Error(VerificationTimeout(f"verify callback did not complete within {timeout}s"))

        if error:
            logger.info("verify reported an error", extra={"strategy": self.name, "outcome": "error"})
            return Error(error)
        if not user:
            logger.info("verify rejected profile", extra={"strategy": self.name, "outcome": "failure"})
            return Failure(info)

        logger.info("authenticated", extra={"strategy": self.name, "outcome": "success"})
        return Success(user, info)

    async def _call_verify(self, args: Tuple[Any, ...], done: VerifyDone) -> Tuple[Any, Any, Any]:
        """Run the verify callback and wait for its ``done`` result.

        An exception raised by the callback is returned as the error slot, so
        it is reported as is and never mistaken for the deadline expiring.
        """
        try:
            result = self._verify(*args)
            if inspect.isawaitable(result):
                await result
        except Exception as exc:
            logger.exception("verify callback raised", extra={"strategy": self.name, "outcome": "error"})
            return exc, None, None
        return await done.wait()
