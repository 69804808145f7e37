"""Webhook ingester starter."""

import uvicorn

from operand_demos.core.config import get_settings
from operand_demos.core.logging import setup_logger

logger = setup_logger(__name__)


def main() -> None:
    settings = get_settings()
    logger.info(f"Listening on {settings.HOST}:{settings.PORT}")
    uvicorn.run(
        "operand_demos.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )


if __name__ == "__main__":
    main()
