"""Entry point: load configuration, set up logging and serve the API."""

import logging

import uvicorn

from product_api.api import create_app
from product_api.config import get_config, get_environment

logger = logging.getLogger(__name__)


def main() -> None:
    config = get_config()

    logging.basicConfig(
        level=config.logging.level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    app = create_app(config)

    logger.info(
        f"Starting Product API ({get_environment()}) on {config.server.host}:{config.server.port}"
    )
    uvicorn.run(app, host=config.server.host, port=config.server.port)


if __name__ == "__main__":
    main()
