"""Unbind auth method use case."""

from pydantic import BaseModel

from unid.application.usecase.base import BaseUseCase
from unid.domain.service import BindingService, IdentityService, JWTService
from unid.domain.value import AuthType


class UnbindAuthMethodRequest(BaseModel):
    """Unbind auth method request."""

    token: str  # JWT token
    auth_type: AuthType


class UnbindAuthMethodResponse(BaseModel):
    """Unbind auth method response."""

    status: str
    message: str


class UnbindAuthMethodUseCase(BaseUseCase):
    """Use case for removing one login method from the caller."""

    def __init__(
        self,
        jwt_service: JWTService,
        identity_service: IdentityService,
        binding_service: BindingService,
    ) -> None:
        """Initialize unbind auth method use case.

        Args:
            jwt_service: JWT token domain service
            identity_service: Identity domain service
            binding_service: Binding domain service
        """
        self.jwt_service = jwt_service
        self.identity_service = identity_service
        self.binding_service = binding_service

    async def execute(
        self, request: UnbindAuthMethodRequest
    ) -> UnbindAuthMethodResponse:
        """Execute unbind flow.

        Raises:
            InvalidClaimError: If the token is invalid or names no identity
            LastMethodError: If it is the identity's only binding
            NotFoundError: If no binding of that type exists
        """
        claim = self.jwt_service.verify_claim(request.token)
        identity = await self.identity_service.resolve_claim(claim)

        removed = await self.binding_service.unbind(
            identity.universal_id, request.auth_type
        )

        return UnbindAuthMethodResponse(
            status="ok",
            message=f"Unbound {removed.method}",
        )
