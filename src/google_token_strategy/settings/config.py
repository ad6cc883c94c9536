from __future__ import annotations

from functools import lru_cache
from importlib.metadata import PackageNotFoundError, version as pkg_version
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, HttpUrl, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_AUTHORIZATION_URL = "https://accounts.google.com/o/oauth2/auth"
DEFAULT_TOKEN_URL = "https://accounts.google.com/o/oauth2/token"
DEFAULT_API_VERSION = "v3"
PROFILE_URL_TEMPLATE = "https://www.googleapis.com/oauth2/{version}/userinfo"


def _package_version(default: str = "0.1.0") -> str:
    try:
        return pkg_version("google-token-strategy")
    except PackageNotFoundError:
        return default


class StrategyOptions(BaseModel):
    """Immutable configuration for :class:`GoogleTokenStrategy`.

    Accepts both the snake_case field names and the camelCase option names
    (``clientID``, ``profileURL``, ``passReqToCallback`` ...).
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    client_id: str = Field(alias="clientID")
    client_secret: str = Field(alias="clientSecret")

    authorization_url: HttpUrl = Field(default=HttpUrl(DEFAULT_AUTHORIZATION_URL), alias="authorizationURL")
    token_url: HttpUrl = Field(default=HttpUrl(DEFAULT_TOKEN_URL), alias="tokenURL")
    g_api_version: str = Field(default=DEFAULT_API_VERSION, alias="gApiVersion")
    # Filled from g_api_version when not given
    profile_url: HttpUrl = Field(alias="profileURL")

    code_field: str = Field(default="code", alias="codeField")
    access_token_field: str = Field(default="access_token", alias="accessTokenField")
    refresh_token_field: str = Field(default="refresh_token", alias="refreshTokenField")
    pass_req_to_callback: bool = Field(default=False, alias="passReqToCallback")

    timeout: float = Field(default=10.0, gt=0)
    verify_timeout: Optional[float] = Field(default=None, gt=0, alias="verifyTimeout")

    @model_validator(mode="before")
    @classmethod
    def _default_profile_url(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        if data.get("profileURL", data.get("profile_url")) is not None:
            return data
        version = data.get("gApiVersion", data.get("g_api_version"))
        if version is None:
            version = DEFAULT_API_VERSION
        data = {k: v for k, v in data.items() if k not in ("profileURL", "profile_url")}
        data["profile_url"] = PROFILE_URL_TEMPLATE.format(version=version)
        return data


class ServerSettings(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False
    reload: bool = False
    log_level: Literal["critical", "error", "warning", "info", "debug", "trace"] = "info"


class LoggingSettings(BaseModel):
    as_json: bool = False


class Settings(BaseSettings):
    """Service settings loaded from environment (and .env)."""

    app_name: str = "Google Token Strategy"
    app_version: str = Field(default_factory=_package_version)

    server: ServerSettings = ServerSettings()
    logging: LoggingSettings = LoggingSettings()
    # Unset until GOOGLE_TOKEN_STRATEGY_GOOGLE__CLIENT_ID/__CLIENT_SECRET are provided
    google: Optional[StrategyOptions] = None

    model_config = SettingsConfigDict(
        env_prefix="GOOGLE_TOKEN_STRATEGY_",
        env_nested_delimiter="__",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()
