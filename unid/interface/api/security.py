"""Bearer token extraction."""

from fastapi import Header

from unid.domain.error import InvalidClaimError


def bearer_token(authorization: str | None = Header(default=None)) -> str:
    """Extract the token from an ``Authorization: Bearer <token>`` header.

    Raises:
        InvalidClaimError: If the header is missing or malformed
    """
    if not authorization:
        raise InvalidClaimError("Missing Authorization header")

    scheme, _, token = authorization.partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token:
        raise InvalidClaimError("Authorization header must be 'Bearer <token>'")
    return token
