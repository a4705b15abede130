"""Main entry point for the engine relay."""

from pathlib import Path

import uvicorn
from dotenv import load_dotenv

from relay.api import create_fastapi_app
from relay.app import Application
from relay.config import Settings
from relay.logging_config import get_logger, setup_logging

logger = get_logger(__name__)


def main():
    """Run the application."""
    project_root = Path(__file__).resolve().parent.parent
    load_dotenv(project_root / ".env")
    setup_logging()

    settings = Settings.from_env()
    app = create_fastapi_app(Application(settings))

    logger.info(f"Listening on http://{settings.host}:{settings.port}")
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level="info",
    )


if __name__ == "__main__":
    main()
