#!/usr/bin/env python3
"""Start the identity API with Logfire error tracking for startup errors."""

import sys
import logfire
import uvicorn

from unid.config import Settings
from unid.util.logging import setup_logging
from unid.util.observability import configure_logfire


def main() -> int:
    """Serve the API and log any startup errors to Logfire."""
    settings = Settings()

    # Configure telemetry and logging before the app module is imported
    configure_logfire(settings)
    setup_logging(settings)

    try:
        logfire.info(
            "Starting identity API",
            host=settings.api.host,
            port=settings.api.port,
            git_sha=settings.git_sha,
        )
        uvicorn.run(
            "unid.interface.api.app:app",
            host=settings.api.host,
            port=settings.api.port,
            log_level="debug" if settings.debug else "info",
        )
        return 0

    except Exception as e:
        logfire.error(
            "Identity API startup failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise


if __name__ == "__main__":
    sys.exit(main())
