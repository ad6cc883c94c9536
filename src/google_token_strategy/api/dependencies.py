from __future__ import annotations

from fastapi import Depends, Request

from google_token_strategy.errors import AuthenticationError, AuthenticationFailed, StrategyNotConfigured
from google_token_strategy.outcomes import Error, Failure, Success
from google_token_strategy.request import from_starlette
from google_token_strategy.strategy import GoogleTokenStrategy


def get_strategy(request: Request) -> GoogleTokenStrategy:
    strategy = getattr(request.app.state, "google_token_strategy", None)
    if strategy is None:
        raise StrategyNotConfigured(
            "Google client credentials are not configured "
            "(set GOOGLE_TOKEN_STRATEGY_GOOGLE__CLIENT_ID and __CLIENT_SECRET)"
        )
    return strategy


async def require_google_user(
    request: Request,
    strategy: GoogleTokenStrategy = Depends(get_strategy),
) -> Success:
    """Authenticate the request or raise for the failure/error outcomes."""
    fields = await from_starlette(request)
    outcome = await strategy.authenticate(fields)
    if isinstance(outcome, Failure):
        raise AuthenticationFailed(outcome.info)
    if isinstance(outcome, Error):
        raise AuthenticationError(outcome.cause)
    return outcome
