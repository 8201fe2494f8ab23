#setup: python -m venv .venv
#setup: source .venv/bin/activate   # (windows: .venv\Scripts\activate)
#setup: pip install -U pip -e ".[test]"
#setup: flask --app savings_calculator.server run --port 3001 --debug

from __future__ import annotations

import logging

from savings_calculator.app import create_app
from savings_calculator.config import settings

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - [%(levelname)s] - %(name)s - %(message)s",
    )


configure_logging(settings.LOG_LEVEL)
app = create_app(settings)


if __name__ == "__main__":
    logger.info("Server running at: http://localhost:%s/", settings.PORT)
    logger.info("Environment: %s", settings.ENV)
    logger.info("CORS allowed origins: %s", ", ".join(settings.allowed_origins))
    app.run(port=settings.PORT, debug=not settings.is_production)
