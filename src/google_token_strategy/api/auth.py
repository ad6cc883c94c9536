from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Depends

from google_token_strategy.api.dependencies import require_google_user
from google_token_strategy.outcomes import Success
from google_token_strategy.profile import Profile


router = APIRouter(prefix="/auth", tags=["auth"])


def accept_profile(access_token: str, refresh_token: str | None, profile: Profile, done) -> None:
    """Default verify callback: any profile with a Google subject id is a user."""
    if not profile.id:
        done(None, None, {"message": "Google profile has no subject identifier"})
        return
    done(None, profile.to_dict(include_raw=False), {"has_refresh_token": bool(refresh_token)})


@router.api_route("/google/token", methods=["GET", "POST"])
async def google_token(outcome: Success = Depends(require_google_user)) -> Dict[str, Any]:
    return {"user": outcome.user, "info": outcome.info}
