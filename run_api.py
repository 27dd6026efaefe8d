"""Run the Family Registry API server."""
import logging

import uvicorn

from src.config import settings
from src.logging_config import setup_logging

logger = logging.getLogger(__name__)


def main() -> None:
    setup_logging()
    logger.info("Starting Family Registry API on http://%s:%d", settings.api.host, settings.api.port)
    uvicorn.run(
        "src.api.main:app",
        host=settings.api.host,
        port=settings.api.port,
        reload=settings.api.reload,
        log_level=settings.log_level.lower()
    )


if __name__ == "__main__":
    main()
