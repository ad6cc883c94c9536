"""
Main entry point for the Google token authentication service.
"""
from dotenv import load_dotenv
import uvicorn
from google_token_strategy.app import create_app
from google_token_strategy.settings import get_settings

# Load environment variables from a .env file if present
load_dotenv()

# Create the FastAPI application
app = create_app()


def main() -> None:
    """Main entry point for running the application."""
    s = get_settings()
    uvicorn.run(
        "google_token_strategy.main:app",
        host=s.server.host,
        port=s.server.port,
        reload=s.server.reload,
        log_level=s.server.log_level,
    )


if __name__ == "__main__":
    main()
