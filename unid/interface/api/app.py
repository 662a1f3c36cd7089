"""FastAPI application."""

from dishka import AsyncContainer
from fastapi import FastAPI

from unid.interface.api.routes import health, identity
from unid.interface.error import register_error_handlers
from unid.util.di.container import create_container, setup_di
from unid.util.observability import instrument_fastapi, instrument_httpx


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.

    Args:
        container: DI container to use; the production container by default
    """
    # Instrument httpx for outbound credential checks
    instrument_httpx()

    app_instance = FastAPI(
        title="Unified Identity API",
        description="Identities reachable through several bound login methods, with account merging",
        version="0.1.0",
    )

    # Instrument FastAPI for automatic tracing of HTTP requests
    instrument_fastapi(app_instance)

    setup_di(app_instance, container or create_container())

    register_error_handlers(app_instance)

    # Register routes
    app_instance.include_router(health.router)
    app_instance.include_router(identity.router)

    return app_instance


# Create app instance for uvicorn
# Note: Logfire must be configured before this module is imported
# In production: start_app.py handles this
app = create_app()
