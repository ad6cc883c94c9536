from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI

from google_token_strategy.api import auth_router, system_router
from google_token_strategy.api.auth import accept_profile
from google_token_strategy.app.exceptions import register_exception_handlers
from google_token_strategy.app.logging_config import configure_logging
from google_token_strategy.middleware.request_id import RequestIDMiddleware
from google_token_strategy.settings import Settings, get_settings
from google_token_strategy.strategy import GoogleTokenStrategy


logger = logging.getLogger(__name__)


def build_strategy(settings: Settings) -> Optional[GoogleTokenStrategy]:
    if settings.google is None:
        logger.warning("Google client credentials not configured; /auth endpoints will return 500")
        return None
    return GoogleTokenStrategy(settings.google, accept_profile)


def create_app(strategy: Optional[GoogleTokenStrategy] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        strategy: Strategy used by the ``/auth`` routes. Built from settings when omitted.

    Returns:
        Configured FastAPI application instance
    """
    settings = get_settings()
    configure_logging(settings.logging.as_json, settings.server.log_level)

    app = FastAPI(
        title=settings.app_name,
        description="Authenticate requests with a Google OAuth 2.0 access token",
        version=settings.app_version,
        docs_url="/docs",
        redoc_url="/redoc",
        debug=settings.server.debug,
    )
    app.state.google_token_strategy = strategy if strategy is not None else build_strategy(settings)

    # Routers
    app.include_router(system_router)
    app.include_router(auth_router)

    # Middleware
    app.add_middleware(RequestIDMiddleware)

    # Exceptions
    register_exception_handlers(app)

    return app
