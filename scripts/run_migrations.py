#!/usr/bin/env python3
"""Run identity schema migrations with Logfire error tracking.

Usage: run_migrations.py [revision]   (defaults to "head")
"""

import sys
import logfire
from alembic import command
from alembic.config import Config

from unid.config import Settings
from unid.util.logging import setup_logging
from unid.util.observability import configure_logfire


def main(argv: list[str]) -> int:
    """Upgrade the schema to the requested revision, logging failures."""
    settings = Settings()
    target = argv[1] if len(argv) > 1 else "head"

    configure_logfire(settings)
    setup_logging(settings)

    with logfire.span("migrations.upgrade", target=target):
        try:
            # env.py reads the database URL from Settings
            alembic_cfg = Config("alembic.ini")
            command.upgrade(alembic_cfg, target)
        except Exception as e:
            logfire.error(
                "Identity schema migration failed",
                target=target,
                error=str(e),
                error_type=type(e).__name__,
                _exc_info=sys.exc_info(),
            )
            # Never start the API on a half-migrated schema
            raise

    logfire.info("Identity schema at revision", target=target)
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv))
