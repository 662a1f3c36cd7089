"""Application layer DI providers."""

from dishka import Scope, provide

from unid.application.usecase.auth import LoginUseCase
from unid.application.usecase.identity import (
    BindAuthMethodUseCase,
    GetIdentityInfoUseCase,
    MergeIdentitiesUseCase,
    RegisterIdentityUseCase,
    UnbindAuthMethodUseCase,
)
from unid.domain.service import (
    BindingService,
    IdentityService,
    JWTService,
    LoginService,
    MergeService,
)
from unid.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Auth use cases
    @provide(scope=Scope.REQUEST)
    def get_login_use_case(
        self, login_service: LoginService, jwt_service: JWTService
    ) -> LoginUseCase:
        """Provide login use case."""
        return LoginUseCase(login_service=login_service, jwt_service=jwt_service)

    # Identity use cases
    @provide(scope=Scope.REQUEST)
    def get_merge_identities_use_case(
        self, jwt_service: JWTService, merge_service: MergeService
    ) -> MergeIdentitiesUseCase:
        """Provide merge identities use case."""
        return MergeIdentitiesUseCase(
            jwt_service=jwt_service, merge_service=merge_service
        )

    @provide(scope=Scope.REQUEST)
    def get_identity_info_use_case(
        self, jwt_service: JWTService, identity_service: IdentityService
    ) -> GetIdentityInfoUseCase:
        """Provide get identity info use case."""
        return GetIdentityInfoUseCase(
            jwt_service=jwt_service, identity_service=identity_service
        )

    @provide(scope=Scope.REQUEST)
    def get_bind_auth_method_use_case(
        self,
        jwt_service: JWTService,
        identity_service: IdentityService,
        binding_service: BindingService,
    ) -> BindAuthMethodUseCase:
        """Provide bind auth method use case."""
        return BindAuthMethodUseCase(
            jwt_service=jwt_service,
            identity_service=identity_service,
            binding_service=binding_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_unbind_auth_method_use_case(
        self,
        jwt_service: JWTService,
        identity_service: IdentityService,
        binding_service: BindingService,
    ) -> UnbindAuthMethodUseCase:
        """Provide unbind auth method use case."""
        return UnbindAuthMethodUseCase(
            jwt_service=jwt_service,
            identity_service=identity_service,
            binding_service=binding_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_register_identity_use_case(
        self, identity_service: IdentityService, jwt_service: JWTService
    ) -> RegisterIdentityUseCase:
        """Provide register identity use case."""
        return RegisterIdentityUseCase(
            identity_service=identity_service, jwt_service=jwt_service
        )
