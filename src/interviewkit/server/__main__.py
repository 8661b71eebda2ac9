"""Run the relay with uvicorn: ``python -m interviewkit.server``."""

from __future__ import annotations

import logging
import sys

import uvicorn
from pydantic import ValidationError

from interviewkit.server.app import create_app
from interviewkit.server.settings import Settings

logger = logging.getLogger("interviewkit.server")


def main() -> int:
    try:
        settings = Settings()  # type: ignore[call-arg]  # fields populated from env vars at runtime
    except ValidationError as exc:
        logging.basicConfig(level=logging.INFO)
        missing = ", ".join(str(err["loc"][0]).upper() for err in exc.errors())
        logger.error("Invalid configuration: %s is not set or invalid", missing)
        return 1

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("Backend server running on port %d", settings.port)
    uvicorn.run(create_app(settings), host="0.0.0.0", port=settings.port)  # noqa: S104  # nosec B104
    return 0


if __name__ == "__main__":
    sys.exit(main())
