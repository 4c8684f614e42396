"""Logging configuration for the application."""

import logging
import sys

from kopiena.config import Settings


def setup_logging(settings: Settings) -> None:
    """Configure application logging.

    Sets up console logging with a level derived from the environment.
    Structured events go through Logfire; this covers stdlib loggers
    (uvicorn, alembic, sqlalchemy) that still write plain records.

    Args:
        settings: Application settings
    """
    if settings.debug:
        level = logging.DEBUG
    elif settings.environment == "production":
        level = logging.WARNING
    else:
        level = logging.INFO

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,  # Override any existing configuration
    )

    # SQL echo is controlled by settings.debug on the engine
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    logging.getLogger("kopiena").setLevel(level)

    logger = logging.getLogger(__name__)
    logger.info(
        "Logging configured: environment=%s, level=%s",
        settings.environment,
        logging.getLevelName(level),
    )
