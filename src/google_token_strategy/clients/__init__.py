from google_token_strategy.clients.oauth2 import OAuth2Client
from google_token_strategy.clients.types import OAuth2Transport

__all__ = ["OAuth2Client", "OAuth2Transport"]
