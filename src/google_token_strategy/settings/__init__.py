from google_token_strategy.settings.config import Settings, StrategyOptions, get_settings

__all__ = ["Settings", "StrategyOptions", "get_settings"]
