"""Translation of domain and adapter errors into HTTP responses."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from unid.adapter.error import CredentialServiceError
from unid.domain.error import (
    AuthFailedError,
    ConflictError,
    DomainError,
    InvalidClaimError,
    LastMethodError,
    NotFoundError,
    SameIdentityError,
    UnauthorizedError,
    ValidationError,
)

logger = logging.getLogger(__name__)

STATUS_BY_ERROR: dict[type[DomainError], int] = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    InvalidClaimError: status.HTTP_401_UNAUTHORIZED,
    AuthFailedError: status.HTTP_401_UNAUTHORIZED,
    UnauthorizedError: status.HTTP_403_FORBIDDEN,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    SameIdentityError: status.HTTP_409_CONFLICT,
    ConflictError: status.HTTP_409_CONFLICT,
    LastMethodError: status.HTTP_409_CONFLICT,
}


def status_for(error: DomainError) -> int:
    """HTTP status for a domain error, following its class hierarchy."""
    for cls in type(error).__mro__:
        if cls in STATUS_BY_ERROR:
            return STATUS_BY_ERROR[cls]
    return status.HTTP_400_BAD_REQUEST


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    """Render a domain error as ``{"error": kind, "detail": message}``."""
    code = status_for(exc)
    logger.info(
        "%s %s failed: %s (%s)", request.method, request.url.path, exc.kind, exc
    )
    return JSONResponse(
        status_code=code, content={"error": exc.kind, "detail": str(exc)}
    )


async def credential_service_error_handler(
    request: Request, exc: Exception
) -> JSONResponse:
    """Render an unreachable credential service as a bad gateway."""
    logger.error("Credential service failure on %s: %s", request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={"error": "credential_service", "detail": str(exc)},
    )


def register_error_handlers(app: FastAPI) -> None:
    """Register the error handlers on the application."""
    app.add_exception_handler(DomainError, domain_error_handler)
    app.add_exception_handler(CredentialServiceError, credential_service_error_handler)
