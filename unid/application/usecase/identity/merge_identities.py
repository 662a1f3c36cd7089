"""Merge identities use case."""

from pydantic import BaseModel

from unid.application.usecase.base import BaseUseCase
from unid.domain.service import JWTService, MergeService
from unid.domain.value import AuthMethod


class MergeIdentitiesRequest(BaseModel):
    """Merge identities request."""

    token: str  # Caller's JWT token
    reserved_user_token: str
    deleted_user_token: str


class MergeIdentitiesResponse(BaseModel):
    """Merge identities response."""

    status: str
    universal_id: str
    deleted_user_id: str
    merged_auth_methods: list[AuthMethod]
    message: str


class MergeIdentitiesUseCase(BaseUseCase):
    """Use case for merging two identities the caller controls."""

    def __init__(self, jwt_service: JWTService, merge_service: MergeService) -> None:
        """Initialize merge identities use case.

        Args:
            jwt_service: JWT token domain service
            merge_service: Merge domain service
        """
        self.jwt_service = jwt_service
        self.merge_service = merge_service

    async def execute(self, request: MergeIdentitiesRequest) -> MergeIdentitiesResponse:
        """Execute merge flow.

        Steps:
        1. Verify the caller's token and both party tokens
        2. Merge the deleted identity into the reserved one

        Args:
            request: Request with the three tokens

        Returns:
            Merge summary

        Raises:
            InvalidClaimError: If any token is invalid or names no identity
            SameIdentityError: If both party tokens name the same identity
            UnauthorizedError: If the caller is not a party
            ConflictError: If a method was claimed concurrently
            NotFoundError: If a concurrent merge removed an identity
        """
        caller = self.jwt_service.verify_claim(request.token)
        reserved = self.jwt_service.verify_claim(request.reserved_user_token)
        deleted = self.jwt_service.verify_claim(request.deleted_user_token)

        result = await self.merge_service.merge(caller, reserved, deleted)

        return MergeIdentitiesResponse(
            status="ok",
            universal_id=str(result.universal_id),
            deleted_user_id=str(result.deleted_universal_id),
            merged_auth_methods=result.transferred_methods,
            message=(
                f"Merged {len(result.transferred_methods)} authentication method(s) "
                "into the reserved identity"
            ),
        )
