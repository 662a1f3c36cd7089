"""Bind auth method use case."""

from datetime import datetime

from pydantic import BaseModel

from unid.application.usecase.base import BaseUseCase
from unid.domain.error import ValidationError
from unid.domain.service import BindingService, IdentityService, JWTService
from unid.domain.value import AuthMethod, AuthType


class BindAuthMethodRequest(BaseModel):
    """Bind auth method request."""

    token: str  # JWT token
    auth_type: AuthType
    auth_value: str


class BindingInfo(BaseModel):
    """Binding information for response."""

    id: str
    universal_id: str
    auth_type: AuthType
    auth_value: str
    created_at: datetime


class BindAuthMethodResponse(BaseModel):
    """Bind auth method response."""

    status: str
    message: str
    binding: BindingInfo


class BindAuthMethodUseCase(BaseUseCase):
    """Use case for binding an additional login method to the caller."""

    def __init__(
        self,
        jwt_service: JWTService,
        identity_service: IdentityService,
        binding_service: BindingService,
    ) -> None:
        """Initialize bind auth method use case.

        Args:
            jwt_service: JWT token domain service
            identity_service: Identity domain service
            binding_service: Binding domain service
        """
        self.jwt_service = jwt_service
        self.identity_service = identity_service
        self.binding_service = binding_service

    async def execute(self, request: BindAuthMethodRequest) -> BindAuthMethodResponse:
        """Execute bind flow.

        Raises:
            InvalidClaimError: If the token is invalid or names no identity
            ValidationError: If the value is blank or too long
            ConflictError: If another identity owns the method
        """
        claim = self.jwt_service.verify_claim(request.token)
        identity = await self.identity_service.resolve_claim(claim)

        try:
            method = AuthMethod(
                auth_type=request.auth_type, auth_value=request.auth_value
            )
        except ValueError:
            raise ValidationError("Auth value must be 1-255 characters")

        if (
            method.auth_type is AuthType.PASSWORD
            and method.auth_value != identity.qualified_name.root
        ):
            raise ValidationError("Password bindings must use the account name owner/name")

        binding = await self.binding_service.bind(
            identity.universal_id, method.auth_type, method.auth_value
        )

        return BindAuthMethodResponse(
            status="ok",
            message=f"Bound {method.auth_type.value} to identity",
            binding=BindingInfo(
                id=str(binding.id),
                universal_id=str(binding.universal_id),
                auth_type=binding.auth_type,
                auth_value=binding.auth_value,
                created_at=binding.created_at,
            ),
        )
