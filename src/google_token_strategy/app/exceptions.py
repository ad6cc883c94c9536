from __future__ import annotations

import logging

import httpx
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from google_token_strategy.errors import AuthenticationError, AuthenticationFailed, StrategyNotConfigured


logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(AuthenticationFailed)
    async def authentication_failed_handler(_: Request, exc: AuthenticationFailed):
        content = {"detail": str(exc)}
        if isinstance(exc.info, dict):
            content["info"] = exc.info
        return JSONResponse(status_code=401, content=content, headers={"WWW-Authenticate": "Bearer"})

    @app.exception_handler(AuthenticationError)
    async def authentication_error_handler(request: Request, exc: AuthenticationError):
        logger.error(
            "authentication error: %s",
            type(exc.cause).__name__,
            extra={"request_id": getattr(request.state, "request_id", None), "path": request.url.path},
        )
        return JSONResponse(status_code=500, content={"detail": "Authentication error"})

    @app.exception_handler(StrategyNotConfigured)
    async def not_configured_handler(_: Request, exc: StrategyNotConfigured):
        return JSONResponse(status_code=500, content={"detail": str(exc)})

    @app.exception_handler(httpx.HTTPError)
    async def httpx_error_handler(_: Request, exc: httpx.HTTPError):
        return JSONResponse(status_code=502, content={"detail": f"External API error: {str(exc)}"})

    @app.exception_handler(Exception)
    async def unhandled_error_handler(_: Request, __: Exception):
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})
