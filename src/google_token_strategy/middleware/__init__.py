from google_token_strategy.middleware.request_id import RequestIDMiddleware

__all__ = ["RequestIDMiddleware"]
