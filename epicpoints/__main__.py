import logging

import uvicorn

from epicpoints.config import settings
from epicpoints.logging_config import setup_logging

logger = logging.getLogger(__name__)


def main() -> None:
    setup_logging()
    logger.info("Server running", extra={"host": settings.host, "port": settings.port})
    uvicorn.run("epicpoints.main:app", host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
