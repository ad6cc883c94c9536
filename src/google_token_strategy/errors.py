from __future__ import annotations

from typing import Any, Mapping


class GoogleTokenError(Exception):
    """Base class for errors raised by the Google token strategy."""


class InternalOAuthError(GoogleTokenError):
    """Wraps a failure talking to the OAuth provider.

    ``oauth_error`` holds the underlying transport exception; it is also
    chained as ``__cause__`` when raised with ``raise ... from``. Its text is
    kept out of ``str()`` since httpx messages include the token-bearing URL.
    """

    def __init__(self, message: str, oauth_error: BaseException | None = None) -> None:
        super().__init__(message)
        self.oauth_error = oauth_error


class VerificationTimeout(GoogleTokenError):
    """Raised when the verify callback does not complete in time."""


class StrategyNotConfigured(GoogleTokenError):
    """Raised when the service has no Google client credentials configured."""


class AuthenticationFailed(GoogleTokenError):
    """The request is unauthenticated (missing token or rejected by verify)."""

    def __init__(self, info: Mapping[str, Any] | str | None = None) -> None:
        self.info = info
        super().__init__(_failure_message(info))


class AuthenticationError(GoogleTokenError):
    """Authentication could not complete because of an error."""

    def __init__(self, cause: BaseException) -> None:
        super().__init__(str(cause))
        self.cause = cause


def _failure_message(info: Mapping[str, Any] | str | None) -> str:
    if isinstance(info, str) and info:
        return info
    if isinstance(info, Mapping):
        message = info.get("message")
        if isinstance(message, str) and message:
            return message
    return "Unauthorized"
