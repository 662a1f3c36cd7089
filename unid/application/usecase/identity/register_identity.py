"""Register identity use case."""

from pydantic import BaseModel, Field

from unid.application.usecase.base import BaseUseCase
from unid.domain.service import IdentityService, JWTService
from unid.domain.value import AuthMethod, AuthType


class RegisterIdentityRequest(BaseModel):
    """Register identity request.

    A password method is added automatically when ``with_password`` is
    set; its value is always the canonical ``owner/name``.
    """

    owner: str = Field(min_length=1, max_length=100, pattern=r"^[^/]+$")
    name: str = Field(min_length=1, max_length=100, pattern=r"^[^/]+$")
    display_name: str | None = None
    methods: list[AuthMethod] = []
    with_password: bool = False


class RegisterIdentityResponse(BaseModel):
    """Register identity response."""

    universal_id: str
    owner: str
    name: str
    bound_auth_methods: list[AuthMethod]
    token: str


class RegisterIdentityUseCase(BaseUseCase):
    """Use case for registering a new identity."""

    def __init__(
        self, identity_service: IdentityService, jwt_service: JWTService
    ) -> None:
        """Initialize register identity use case.

        Args:
            identity_service: Identity domain service
            jwt_service: JWT token domain service
        """
        self.identity_service = identity_service
        self.jwt_service = jwt_service

    async def execute(
        self, request: RegisterIdentityRequest
    ) -> RegisterIdentityResponse:
        """Execute registration flow.

        Raises:
            ValidationError: If no method is supplied
            ConflictError: If the account name or a method is taken
        """
        # Password values are derived, never taken from the client
        methods = [m for m in request.methods if m.auth_type is not AuthType.PASSWORD]
        if request.with_password:
            methods.insert(0, AuthMethod.for_password(request.owner, request.name))

        identity, bindings = await self.identity_service.register_identity(
            request.owner, request.name, methods, display_name=request.display_name
        )

        return RegisterIdentityResponse(
            universal_id=str(identity.universal_id),
            owner=identity.owner,
            name=identity.name,
            bound_auth_methods=[b.method for b in bindings],
            token=self.jwt_service.create_token(identity),
        )
