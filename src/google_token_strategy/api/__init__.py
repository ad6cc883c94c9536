from google_token_strategy.api.auth import router as auth_router
from google_token_strategy.api.system import router as system_router

__all__ = ["auth_router", "system_router"]
