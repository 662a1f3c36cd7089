"""Domain layer DI providers."""

from dishka import Scope, provide

from unid.config import AuthSettings
from unid.domain.model import CascadePlan
from unid.domain.repository import (
    BindingRepository,
    CascadeRepository,
    IdentityRepository,
    UnitOfWork,
)
from unid.domain.service import (
    BindingService,
    CredentialVerifier,
    IdentityService,
    JWTService,
    LoginService,
    MergeService,
)
from unid.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_binding_service(
        self,
        binding_repository: BindingRepository,
        identity_repository: IdentityRepository,
        unit_of_work: UnitOfWork,
    ) -> BindingService:
        """Provide binding domain service."""
        return BindingService(
            binding_repository=binding_repository,
            identity_repository=identity_repository,
            unit_of_work=unit_of_work,
        )

    @provide
    def get_identity_service(
        self,
        identity_repository: IdentityRepository,
        binding_service: BindingService,
        unit_of_work: UnitOfWork,
    ) -> IdentityService:
        """Provide identity domain service."""
        return IdentityService(
            identity_repository=identity_repository,
            binding_service=binding_service,
            unit_of_work=unit_of_work,
        )

    @provide
    def get_merge_service(
        self,
        identity_repository: IdentityRepository,
        binding_service: BindingService,
        cascade_repository: CascadeRepository,
        unit_of_work: UnitOfWork,
        cascade_plan: CascadePlan,
    ) -> MergeService:
        """Provide merge domain service."""
        return MergeService(
            identity_repository=identity_repository,
            binding_service=binding_service,
            cascade_repository=cascade_repository,
            unit_of_work=unit_of_work,
            cascade_plan=cascade_plan,
        )

    @provide
    def get_login_service(
        self,
        binding_service: BindingService,
        identity_repository: IdentityRepository,
        credential_verifier: CredentialVerifier,
    ) -> LoginService:
        """Provide login resolution domain service."""
        return LoginService(
            binding_service=binding_service,
            identity_repository=identity_repository,
            credential_verifier=credential_verifier,
        )
