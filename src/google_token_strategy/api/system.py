from __future__ import annotations

from fastapi import APIRouter, Request


router = APIRouter(tags=["system"])


@router.get("/health")
async def health_check(request: Request) -> dict:
    configured = getattr(request.app.state, "google_token_strategy", None) is not None
    return {"status": "healthy", "service": "google-token-strategy", "strategy_configured": configured}
