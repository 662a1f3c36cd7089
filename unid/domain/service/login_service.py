"""Login resolution domain service."""

import logfire

from unid.domain.error import AuthFailedError
from unid.domain.model import Identity
from unid.domain.repository import IdentityRepository
from unid.domain.value import AuthType, QualifiedName, VerifiedAccount

from .base import Service
from .binding_service import BindingService


class CredentialVerifier:
    """Credential-verification collaborator interface."""

    async def verify(self, owner: str, name: str, secret: str) -> VerifiedAccount:
        """Check a secret against the account's stored credential.

        Args:
            owner: Owning organization
            name: Account name
            secret: Secret supplied by the user

        Returns:
            The account the secret belongs to

        Raises:
            AuthFailedError: If the secret does not match
        """
        raise NotImplementedError


class LoginService(Service):
    """Domain service resolving a login attempt to its identity."""

    def __init__(
        self,
        binding_service: BindingService,
        identity_repository: IdentityRepository,
        credential_verifier: CredentialVerifier,
    ) -> None:
        """Initialize login service.

        Args:
            binding_service: Binding domain service
            identity_repository: Identity repository
            credential_verifier: Checks password credentials
        """
        self.binding_service = binding_service
        self.identity_repository = identity_repository
        self.credential_verifier = credential_verifier

    async def resolve_login(
        self, auth_type: AuthType, auth_value: str, credential: str | None = None
    ) -> Identity:
        """Resolve a claimed method (and credential) to the owning identity.

        Every failure is reported as ``AuthFailedError`` so callers cannot
        tell an unknown method from a wrong secret.

        Args:
            auth_type: Authentication method type
            auth_value: Value identifying the user; ``owner/name`` for passwords
            credential: Secret, required for passwords

        Returns:
            The identity owning the method

        Raises:
            AuthFailedError: If the method is unknown or the credential is wrong
        """
        with logfire.span("login_service.resolve_login", auth_type=auth_type.value):
            lookup_value = auth_value.strip()
            if auth_type.requires_credential:
                lookup_value = await self._verify_password(lookup_value, credential)

            binding = await self.binding_service.find_by_method(auth_type, lookup_value)
            if not binding:
                logfire.warn("Login method not bound", auth_type=auth_type.value)
                raise AuthFailedError()

            identity = await self.identity_repository.find_by_universal_id(
                binding.universal_id
            )
            if not identity:
                logfire.error(
                    "Binding points at missing identity",
                    binding_id=str(binding.id),
                    universal_id=str(binding.universal_id),
                )
                raise AuthFailedError()

            logfire.info(
                "Login resolved",
                auth_type=auth_type.value,
                universal_id=str(identity.universal_id),
            )
            return identity

    async def _verify_password(self, auth_value: str, credential: str | None) -> str:
        try:
            account_name = QualifiedName(auth_value)
        except ValueError:
            logfire.warn("Password login with malformed account name")
            raise AuthFailedError()

        if not credential:
            logfire.warn("Password login without credential")
            raise AuthFailedError()

        account = await self.credential_verifier.verify(
            account_name.owner, account_name.name, credential
        )
        # Binding lookups use the canonical form returned by the account service
        return account.qualified_name.root
