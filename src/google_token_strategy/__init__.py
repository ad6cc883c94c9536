"""
Passport-style Google access-token authentication for Python services.
"""
from google_token_strategy.errors import (
    AuthenticationError,
    AuthenticationFailed,
    GoogleTokenError,
    InternalOAuthError,
    VerificationTimeout,
)
from google_token_strategy.outcomes import Error, Failure, Outcome, Success
from google_token_strategy.profile import Profile, ProfileName, ValueObject, normalize_profile
from google_token_strategy.request import RequestFields, TokenRequest, parse_bearer_token, resolve_token
from google_token_strategy.settings import StrategyOptions
from google_token_strategy.strategy import GoogleTokenStrategy, VerifyDone

__all__ = [
    "AuthenticationError",
    "AuthenticationFailed",
    "Error",
    "Failure",
    "GoogleTokenError",
    "GoogleTokenStrategy",
    "InternalOAuthError",
    "Outcome",
    "Profile",
    "ProfileName",
    "RequestFields",
    "StrategyOptions",
    "Success",
    "TokenRequest",
    "ValueObject",
    "VerificationTimeout",
    "VerifyDone",
    "normalize_profile",
    "parse_bearer_token",
    "resolve_token",
]
