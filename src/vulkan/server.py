"""Entry point: `vulkan` console script / `python -m vulkan`."""

import logging
import sys

import uvicorn

from vulkan.config import Settings
from vulkan.context import AppContext
from vulkan.exceptions import ConfigurationError
from vulkan.logger import create_logger
from vulkan.web import create_app


def main() -> None:
    """Load settings from the environment and serve the app with uvicorn."""
    try:
        settings = Settings.from_env()
    except ConfigurationError as e:
        print(f"Environment validation failed: {e}", file=sys.stderr)
        sys.exit(1)

    logger = create_logger(
        name="vulkan",
        level=getattr(logging, settings.log.level, logging.INFO),
        log_file=settings.log.log_file,
        json_format=settings.log.json_format,
    )
    logger.info("Environment validation passed", env=settings.env)

    app = create_app(AppContext.from_settings(settings, logger))
    uvicorn.run(
        app,
        host=settings.server.host,
        port=settings.server.port,
        log_level=settings.log.level.lower(),
    )


if __name__ == "__main__":
    main()
