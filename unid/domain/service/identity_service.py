"""Identity domain service."""

from datetime import datetime, timezone
from uuid import uuid4

import logfire
from sqlalchemy.exc import IntegrityError

from unid.domain.error import (
    ConflictError,
    InvalidClaimError,
    NotFoundError,
    ValidationError,
)
from unid.domain.model import Binding, Identity
from unid.domain.repository import IdentityRepository, UnitOfWork
from unid.domain.value import AuthMethod, IdentityClaim, UniversalId

from .base import Service
from .binding_service import BindingService


class IdentityService(Service):
    """Domain service for resolving and registering identities.

    Resolution never mutates anything; registration is the only way an
    identity comes into existence.
    """

    def __init__(
        self,
        identity_repository: IdentityRepository,
        binding_service: BindingService,
        unit_of_work: UnitOfWork,
    ) -> None:
        """Initialize identity service.

        Args:
            identity_repository: Identity repository
            binding_service: Binding domain service
            unit_of_work: Transaction boundary shared with the repositories
        """
        self.identity_repository = identity_repository
        self.binding_service = binding_service
        self.unit_of_work = unit_of_work

    async def resolve_identity(self, universal_id: UniversalId) -> Identity:
        """Get identity by universal ID.

        Args:
            universal_id: Identity ID

        Returns:
            Identity entity

        Raises:
            NotFoundError: If identity not found
        """
        with logfire.span(
            "identity_service.resolve_identity", universal_id=str(universal_id)
        ):
            identity = await self.identity_repository.find_by_universal_id(
                universal_id
            )
            if not identity:
                logfire.warn("Identity not found", universal_id=str(universal_id))
                raise NotFoundError("Identity", str(universal_id))
            logfire.info(
                "Identity found",
                universal_id=str(universal_id),
                account=identity.qualified_name.root,
            )
            return identity

    async def resolve_claim(self, claim: IdentityClaim) -> Identity:
        """Resolve a verified token claim to a live identity.

        Args:
            claim: Verified token claim

        Returns:
            Identity the claim refers to

        Raises:
            InvalidClaimError: If the identity no longer exists
        """
        try:
            return await self.resolve_identity(claim.universal_id)
        except NotFoundError:
            raise InvalidClaimError(
                f"Token refers to unknown identity {claim.universal_id}"
            )

    async def get_bound_methods(self, universal_id: UniversalId) -> list[AuthMethod]:
        """Get the login methods of an existing identity.

        Args:
            universal_id: Identity ID

        Returns:
            Bound methods, oldest binding first

        Raises:
            NotFoundError: If identity not found
        """
        await self.resolve_identity(universal_id)
        bindings = await self.binding_service.list_bindings(universal_id)
        return [binding.method for binding in bindings]

    async def register_identity(
        self,
        owner: str,
        name: str,
        methods: list[AuthMethod],
        display_name: str | None = None,
    ) -> tuple[Identity, list[Binding]]:
        """Create a new identity with one binding per supplied method.

        Either the identity and all of its bindings are stored, or nothing
        is.

        Args:
            owner: Owning organization
            name: Account name inside the organization
            methods: Login methods to bind; at least one
            display_name: Optional human-readable name

        Returns:
            The created identity and its bindings

        Raises:
            ValidationError: If no method is supplied
            ConflictError: If the account name or any method is taken
        """
        with logfire.span(
            "identity_service.register_identity",
            account=f"{owner}/{name}",
            method_count=len(methods),
        ):
            if not methods:
                raise ValidationError("At least one authentication method is required")

            # Same method listed twice binds once
            unique_methods = list(dict.fromkeys(methods))

            try:
                async with self.unit_of_work.transaction():
                    if await self.identity_repository.find_by_owner_and_name(
                        owner, name
                    ):
                        raise ConflictError(
                            "account", f"Account {owner}/{name} already exists"
                        )

                    identity = Identity(
                        universal_id=UniversalId(uuid4()),
                        owner=owner,
                        name=name,
                        display_name=display_name,
                        created_at=datetime.now(timezone.utc),
                    )
                    await self.identity_repository.save(identity)

                    bindings = [
                        await self.binding_service.add_binding(
                            identity.universal_id, method.auth_type, method.auth_value
                        )
                        for method in unique_methods
                    ]
            except IntegrityError:
                # Lost a race on the account name or a method at commit
                raise ConflictError(
                    "account",
                    f"Account {owner}/{name} or one of its methods is already taken",
                )

            logfire.info(
                "Identity registered",
                universal_id=str(identity.universal_id),
                account=identity.qualified_name.root,
                auth_types=[b.auth_type.value for b in bindings],
            )
            return identity, bindings
