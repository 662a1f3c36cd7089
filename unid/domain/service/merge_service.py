"""Merge domain service."""

import logfire
from sqlalchemy.exc import IntegrityError

from unid.domain.error import (
    ConflictError,
    InvalidClaimError,
    NotFoundError,
    SameIdentityError,
    UnauthorizedError,
)
from unid.domain.model import CascadePlan, Identity, MergeAuthorization, MergeResult
from unid.domain.repository import CascadeRepository, IdentityRepository, UnitOfWork
from unid.domain.value import AuthMethod, IdentityClaim

from .base import Service
from .binding_service import BindingService


def authorize_merge(
    caller: IdentityClaim, reserved: Identity, deleted: Identity
) -> MergeAuthorization:
    """Decide whether the caller may merge ``deleted`` into ``reserved``.

    The caller must be one of the two parties. Holding valid tokens for
    both sides is already checked when the claims are resolved.
    """
    if caller.universal_id in (reserved.universal_id, deleted.universal_id):
        return MergeAuthorization(allowed=True, reason="caller is a merge party")
    return MergeAuthorization(
        allowed=False, reason="caller is neither the reserved nor the deleted identity"
    )


class MergeService(Service):
    """Domain service merging one identity into another.

    The surviving (reserved) identity takes over every method of the
    deleted identity it does not already own. Dependent records of the
    deleted identity are removed according to the cascade plan, then the
    identity itself is deleted. All of it happens in one transaction.
    """

    def __init__(
        self,
        identity_repository: IdentityRepository,
        binding_service: BindingService,
        cascade_repository: CascadeRepository,
        unit_of_work: UnitOfWork,
        cascade_plan: CascadePlan,
    ) -> None:
        """Initialize merge service.

        Args:
            identity_repository: Identity repository
            binding_service: Binding domain service
            cascade_repository: Bulk deletes over dependent tables
            unit_of_work: Transaction boundary shared with the repositories
            cascade_plan: Dependent tables cleared for the deleted identity
        """
        self.identity_repository = identity_repository
        self.binding_service = binding_service
        self.cascade_repository = cascade_repository
        self.unit_of_work = unit_of_work
        self.cascade_plan = cascade_plan

    async def merge(
        self,
        caller: IdentityClaim,
        reserved_claim: IdentityClaim,
        deleted_claim: IdentityClaim,
    ) -> MergeResult:
        """Merge the identity of ``deleted_claim`` into ``reserved_claim``'s.

        Args:
            caller: Claim of the authenticated caller
            reserved_claim: Claim of the identity that survives
            deleted_claim: Claim of the identity that is removed

        Returns:
            Merge summary with the transferred methods

        Raises:
            InvalidClaimError: If either claim refers to no identity
            SameIdentityError: If both claims refer to the same identity
            UnauthorizedError: If the caller is not a party of the merge
            ConflictError: If a concurrent writer claimed a transferred method
            NotFoundError: If a concurrent merge already removed an identity
        """
        with logfire.span(
            "merge_service.merge",
            caller=str(caller.universal_id),
            reserved=str(reserved_claim.universal_id),
            deleted=str(deleted_claim.universal_id),
        ):
            reserved = await self._resolve_party(reserved_claim, "reserved")
            deleted = await self._resolve_party(deleted_claim, "deleted")

            if reserved.universal_id == deleted.universal_id:
                logfire.warn(
                    "Refusing to merge identity with itself",
                    universal_id=str(reserved.universal_id),
                )
                raise SameIdentityError(str(reserved.universal_id))

            authorization = authorize_merge(caller, reserved, deleted)
            if not authorization.allowed:
                logfire.warn(
                    "Merge not authorized",
                    caller=str(caller.universal_id),
                    reason=authorization.reason,
                )
                raise UnauthorizedError(authorization.reason)

            try:
                async with self.unit_of_work.transaction():
                    await self._lock_parties(reserved, deleted)
                    transferred = await self._transfer_bindings(reserved, deleted)
                    await self._run_cascade(deleted)

                    if not await self.identity_repository.delete(deleted.universal_id):
                        logfire.warn(
                            "Deleted identity vanished during merge",
                            universal_id=str(deleted.universal_id),
                        )
                        raise NotFoundError("Identity", str(deleted.universal_id))
            except IntegrityError:
                logfire.warn(
                    "Merge lost a uniqueness race",
                    reserved=str(reserved.universal_id),
                    deleted=str(deleted.universal_id),
                )
                raise ConflictError(
                    "authentication method",
                    "A transferred method was bound to another identity concurrently",
                )

            logfire.info(
                "Identities merged",
                universal_id=str(reserved.universal_id),
                deleted_universal_id=str(deleted.universal_id),
                transferred=[str(m) for m in transferred],
            )
            return MergeResult(
                universal_id=reserved.universal_id,
                deleted_universal_id=deleted.universal_id,
                transferred_methods=transferred,
            )

    async def _resolve_party(self, claim: IdentityClaim, role: str) -> Identity:
        identity = await self.identity_repository.find_by_universal_id(
            claim.universal_id
        )
        if not identity:
            logfire.warn(
                "Merge party not found", role=role, universal_id=str(claim.universal_id)
            )
            raise InvalidClaimError(f"The {role} identity does not exist")
        return identity

    async def _lock_parties(self, reserved: Identity, deleted: Identity) -> None:
        # Fixed lock order so two merges over the same pair cannot deadlock
        for party in sorted((reserved, deleted), key=lambda i: str(i.universal_id)):
            locked = await self.identity_repository.find_by_universal_id(
                party.universal_id, lock=True
            )
            if not locked:
                raise NotFoundError("Identity", str(party.universal_id))

    async def _transfer_bindings(
        self, reserved: Identity, deleted: Identity
    ) -> list[AuthMethod]:
        bindings = await self.binding_service.list_bindings(deleted.universal_id)

        # Old rows must go before re-inserting under the survivor
        await self.binding_service.remove_all_for_identity(deleted.universal_id)

        transferred: list[AuthMethod] = []
        for binding in bindings:
            if await self.binding_service.owns_method(
                reserved.universal_id, binding.auth_type, binding.auth_value
            ):
                logfire.info(
                    "Dropping method already owned by survivor",
                    universal_id=str(reserved.universal_id),
                    auth_type=binding.auth_type.value,
                )
                continue
            await self.binding_service.add_binding(
                reserved.universal_id, binding.auth_type, binding.auth_value
            )
            transferred.append(binding.method)
        return transferred

    async def _run_cascade(self, deleted: Identity) -> None:
        for step in self.cascade_plan.steps:
            with logfire.span("merge_service.cascade", table=step.table):
                count = await self.cascade_repository.delete_for_identity(step, deleted)
                logfire.info(
                    "Dependent records removed",
                    table=step.table,
                    universal_id=str(deleted.universal_id),
                    count=count,
                )
