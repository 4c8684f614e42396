#!/usr/bin/env python3
"""Apply Kopiena schema and taxonomy seed migrations, reporting to Logfire."""

import sys
import logfire
from alembic import command
from alembic.config import Config

from kopiena.config import Settings
from kopiena.util.logging import setup_logging
from kopiena.util.observability import configure_logfire


def main(revision: str = "head") -> int:
    """Upgrade the database to ``revision`` and log any errors to Logfire."""
    settings = Settings()

    setup_logging(settings)
    configure_logfire(settings)

    with logfire.span("Database migrations", revision=revision):
        try:
            # env.py overrides sqlalchemy.url from settings
            alembic_cfg = Config("alembic.ini")
            command.upgrade(alembic_cfg, revision)

            logfire.info("Database migrations completed", revision=revision)
            return 0

        except Exception as e:
            logfire.error(
                "Database migration failed",
                error=str(e),
                error_type=type(e).__name__,
                _exc_info=sys.exc_info(),
            )
            # Re-raise so the container fails and doesn't start with broken schema
            raise


if __name__ == "__main__":
    sys.exit(main(*sys.argv[1:2]))
