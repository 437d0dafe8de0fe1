"""
tutor_api/__main__.py

Development entry point:

    python -m tutor_api
"""

import uvicorn

from tutor_api.core.config import settings
from tutor_api.core.logger import get_logger

logger = get_logger(__name__)


def main() -> None:
    logger.info("%s running on port %d", settings.app_name, settings.port)
    logger.info("Access the application at: http://localhost:%d", settings.port)
    uvicorn.run(
        "tutor_api.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )


if __name__ == "__main__":
    main()
