"""Process entrypoint: serve the API with uvicorn on the configured host and port."""

from __future__ import annotations

import logging

import uvicorn

from src.api.api_config import get_api_config
from src.common.logging import configure_logging

logger = logging.getLogger(__name__)


def run() -> None:
    configure_logging()
    config = get_api_config()
    logger.info("Starting %s on %s:%d", config.api_name, config.host, config.port)
    uvicorn.run("src.api.app:app", host=config.host, port=config.port)


if __name__ == "__main__":
    run()
