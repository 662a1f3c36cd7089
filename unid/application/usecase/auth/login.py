"""Login use case."""

from pydantic import BaseModel

from unid.application.usecase.base import BaseUseCase
from unid.domain.service import JWTService, LoginService
from unid.domain.value import AuthType


class LoginRequest(BaseModel):
    """Login request."""

    auth_type: AuthType
    auth_value: str
    credential: str | None = None


class LoginResponse(BaseModel):
    """Login response."""

    token: str
    universal_id: str
    owner: str
    name: str


class LoginUseCase(BaseUseCase):
    """Use case for logging in with any bound method."""

    def __init__(self, login_service: LoginService, jwt_service: JWTService) -> None:
        """Initialize login use case.

        Args:
            login_service: Login resolution domain service
            jwt_service: JWT token domain service
        """
        self.login_service = login_service
        self.jwt_service = jwt_service

    async def execute(self, request: LoginRequest) -> LoginResponse:
        """Execute login flow.

        Steps:
        1. Resolve the method (and credential) to an identity
        2. Issue a JWT token for that identity

        Raises:
            AuthFailedError: If the login cannot be resolved
        """
        identity = await self.login_service.resolve_login(
            request.auth_type, request.auth_value, request.credential
        )

        return LoginResponse(
            token=self.jwt_service.create_token(identity),
            universal_id=str(identity.universal_id),
            owner=identity.owner,
            name=identity.name,
        )
