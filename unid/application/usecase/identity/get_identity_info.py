"""Get identity info use case."""

from pydantic import BaseModel

from unid.application.usecase.base import BaseUseCase
from unid.domain.service import IdentityService, JWTService
from unid.domain.value import AuthMethod


class GetIdentityInfoRequest(BaseModel):
    """Get identity info request."""

    token: str  # JWT token


class GetIdentityInfoResponse(BaseModel):
    """Get identity info response."""

    universal_id: str
    owner: str
    name: str
    display_name: str | None
    bound_auth_methods: list[AuthMethod]


class GetIdentityInfoUseCase(BaseUseCase):
    """Use case for describing the caller's identity and its bindings."""

    def __init__(
        self, jwt_service: JWTService, identity_service: IdentityService
    ) -> None:
        """Initialize get identity info use case.

        Args:
            jwt_service: JWT token domain service
            identity_service: Identity domain service
        """
        self.jwt_service = jwt_service
        self.identity_service = identity_service

    async def execute(self, request: GetIdentityInfoRequest) -> GetIdentityInfoResponse:
        """Execute get identity info flow.

        Raises:
            InvalidClaimError: If the token is invalid or names no identity
        """
        claim = self.jwt_service.verify_claim(request.token)
        identity = await self.identity_service.resolve_claim(claim)
        methods = await self.identity_service.get_bound_methods(identity.universal_id)

        return GetIdentityInfoResponse(
            universal_id=str(identity.universal_id),
            owner=identity.owner,
            name=identity.name,
            display_name=identity.display_name,
            bound_auth_methods=methods,
        )
