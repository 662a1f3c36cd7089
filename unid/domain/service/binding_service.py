"""Binding domain service."""

from datetime import datetime, timezone
from uuid import uuid4

import logfire
from sqlalchemy.exc import IntegrityError

from unid.domain.error import ConflictError, LastMethodError, NotFoundError
from unid.domain.model.binding import Binding
from unid.domain.repository import BindingRepository, IdentityRepository, UnitOfWork
from unid.domain.value import AuthType, BindingId, UniversalId

from .base import Service


class BindingService(Service):
    """Domain service owning every mutation of identity bindings.

    Keeps ``(auth_type, auth_value)`` unique across identities and refuses
    to leave an identity without a login method.
    """

    def __init__(
        self,
        binding_repository: BindingRepository,
        identity_repository: IdentityRepository,
        unit_of_work: UnitOfWork,
    ) -> None:
        """Initialize binding service.

        Args:
            binding_repository: Binding repository
            identity_repository: Identity repository
            unit_of_work: Transaction boundary shared with the repositories
        """
        self.binding_repository = binding_repository
        self.identity_repository = identity_repository
        self.unit_of_work = unit_of_work

    async def add_binding(
        self, universal_id: UniversalId, auth_type: AuthType, auth_value: str
    ) -> Binding:
        """Bind a method to an identity.

        Idempotent for the owning identity. The lookup is only a fast path;
        the storage unique constraint decides races between writers.

        Args:
            universal_id: Identity to bind to
            auth_type: Authentication method type
            auth_value: Value identifying the user for that type

        Returns:
            The new binding, or the existing one if already bound here

        Raises:
            ConflictError: If another identity owns the method
        """
        with logfire.span(
            "binding_service.add_binding",
            universal_id=str(universal_id),
            auth_type=auth_type.value,
        ):
            existing = await self.binding_repository.find_by_method(
                auth_type, auth_value
            )
            if existing:
                if existing.universal_id == universal_id:
                    logfire.info(
                        "Method already bound to identity",
                        universal_id=str(universal_id),
                        auth_type=auth_type.value,
                    )
                    return existing
                logfire.warn(
                    "Method bound to another identity",
                    universal_id=str(universal_id),
                    owner_universal_id=str(existing.universal_id),
                    auth_type=auth_type.value,
                )
                raise ConflictError(auth_type.value)

            binding = Binding(
                id=BindingId(uuid4()),
                universal_id=universal_id,
                auth_type=auth_type,
                auth_value=auth_value,
                created_at=datetime.now(timezone.utc),
            )

            try:
                saved = await self.binding_repository.insert(binding)
            except IntegrityError:
                logfire.warn(
                    "Concurrent bind lost uniqueness race",
                    universal_id=str(universal_id),
                    auth_type=auth_type.value,
                )
                raise ConflictError(auth_type.value)

            logfire.info(
                "Binding created",
                binding_id=str(saved.id),
                universal_id=str(universal_id),
                auth_type=auth_type.value,
            )
            return saved

    async def list_bindings(self, universal_id: UniversalId) -> list[Binding]:
        """Get all bindings of an identity, oldest first.

        Args:
            universal_id: Identity ID

        Returns:
            List of bindings (may be empty)
        """
        with logfire.span(
            "binding_service.list_bindings", universal_id=str(universal_id)
        ):
            bindings = await self.binding_repository.find_all_by_universal_id(
                universal_id
            )
            logfire.info(
                "Bindings retrieved for identity",
                universal_id=str(universal_id),
                count=len(bindings),
            )
            return bindings

    async def find_by_method(
        self, auth_type: AuthType, auth_value: str
    ) -> Binding | None:
        """Get the binding owning a method.

        Args:
            auth_type: Authentication method type
            auth_value: Value identifying the user for that type

        Returns:
            Binding if found, None otherwise
        """
        with logfire.span(
            "binding_service.find_by_method", auth_type=auth_type.value
        ):
            binding = await self.binding_repository.find_by_method(
                auth_type, auth_value
            )
            if binding:
                logfire.info(
                    "Binding found",
                    auth_type=auth_type.value,
                    universal_id=str(binding.universal_id),
                )
            else:
                logfire.warn("Binding not found", auth_type=auth_type.value)
            return binding

    async def owns_method(
        self, universal_id: UniversalId, auth_type: AuthType, auth_value: str
    ) -> bool:
        """Check whether an identity already owns a method."""
        return await self.binding_repository.exists_for_identity(
            universal_id, auth_type, auth_value
        )

    async def remove_binding(self, binding_id: BindingId) -> None:
        """Remove a single binding.

        Args:
            binding_id: Binding ID

        Raises:
            NotFoundError: If the binding does not exist
        """
        with logfire.span("binding_service.remove_binding", binding_id=str(binding_id)):
            deleted = await self.binding_repository.delete(binding_id)
            if not deleted:
                logfire.warn("Binding not found", binding_id=str(binding_id))
                raise NotFoundError("Binding", str(binding_id))
            logfire.info("Binding removed", binding_id=str(binding_id))

    async def remove_all_for_identity(self, universal_id: UniversalId) -> int:
        """Remove every binding of an identity.

        Only merge uses this; the caller is responsible for running it
        inside a transaction that also removes the identity.

        Args:
            universal_id: Identity ID

        Returns:
            Number of removed bindings
        """
        with logfire.span(
            "binding_service.remove_all_for_identity", universal_id=str(universal_id)
        ):
            count = await self.binding_repository.delete_all_by_universal_id(
                universal_id
            )
            logfire.info(
                "Bindings removed for identity",
                universal_id=str(universal_id),
                count=count,
            )
            return count

    async def bind(
        self, universal_id: UniversalId, auth_type: AuthType, auth_value: str
    ) -> Binding:
        """Bind an additional login method to an existing identity.

        Args:
            universal_id: Identity ID
            auth_type: Authentication method type
            auth_value: Value identifying the user for that type

        Returns:
            The binding (existing one if already bound to this identity)

        Raises:
            NotFoundError: If the identity does not exist
            ConflictError: If another identity owns the method
        """
        identity = await self.identity_repository.find_by_universal_id(universal_id)
        if not identity:
            raise NotFoundError("Identity", str(universal_id))
        return await self.add_binding(universal_id, auth_type, auth_value)

    async def unbind(self, universal_id: UniversalId, auth_type: AuthType) -> Binding:
        """Remove one login method of the given type from an identity.

        Runs with the identity row locked so two concurrent unbinds cannot
        both see a spare binding and leave the identity with none.

        Args:
            universal_id: Identity ID
            auth_type: Type of the method to remove

        Returns:
            The removed binding (the oldest of that type)

        Raises:
            NotFoundError: If the identity or a binding of that type is absent
            LastMethodError: If the identity has exactly one binding
        """
        with logfire.span(
            "binding_service.unbind",
            universal_id=str(universal_id),
            auth_type=auth_type.value,
        ):
            async with self.unit_of_work.transaction():
                identity = await self.identity_repository.find_by_universal_id(
                    universal_id, lock=True
                )
                if not identity:
                    raise NotFoundError("Identity", str(universal_id))

                bindings = await self.list_bindings(universal_id)
                if not bindings:
                    raise NotFoundError("Binding", f"{auth_type.value} for {universal_id}")
                if len(bindings) == 1:
                    logfire.warn(
                        "Refusing to remove last binding",
                        universal_id=str(universal_id),
                        auth_type=auth_type.value,
                    )
                    raise LastMethodError(str(universal_id))

                target = next((b for b in bindings if b.auth_type == auth_type), None)
                if target is None:
                    raise NotFoundError("Binding", f"{auth_type.value} for {universal_id}")

                await self.remove_binding(target.id)
                return target
