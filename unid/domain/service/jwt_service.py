"""JWT token domain service."""

from uuid import UUID

import logfire

from unid.config import AuthSettings
from unid.domain.error import InvalidClaimError
from unid.domain.model import Identity
from unid.domain.value import IdentityClaim, UniversalId
from unid.util.jwt import JWTError, create_token, verify_token

from .base import Service


class JWTService(Service):
    """Domain service for JWT token operations."""

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize JWT service.

        Args:
            auth_settings: Authentication settings
        """
        self.auth_settings = auth_settings

    def create_token(self, identity: Identity) -> str:
        """Create JWT token for an identity.

        Args:
            identity: Identity the token speaks for

        Returns:
            JWT token string
        """
        with logfire.span(
            "jwt_service.create_token", universal_id=str(identity.universal_id)
        ):
            token = create_token(
                str(identity.universal_id),
                identity.owner,
                identity.name,
                self.auth_settings,
            )
            logfire.info(
                "JWT token created", universal_id=str(identity.universal_id)
            )
            return token

    def verify_claim(self, token: str) -> IdentityClaim:
        """Verify JWT token and turn it into an identity claim.

        Args:
            token: JWT token string

        Returns:
            Verified identity claim

        Raises:
            InvalidClaimError: If token is invalid, expired or malformed
        """
        with logfire.span("jwt_service.verify_claim"):
            try:
                payload = verify_token(token, self.auth_settings)
                claim = IdentityClaim(
                    universal_id=UniversalId(UUID(payload.universal_id)),
                    owner=payload.owner,
                    name=payload.name,
                )
            except (JWTError, ValueError) as e:
                logfire.warn("JWT token verification failed", error=str(e))
                raise InvalidClaimError(str(e))

            logfire.info("JWT token verified", universal_id=str(claim.universal_id))
            return claim
