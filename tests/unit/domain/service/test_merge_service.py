"""Unit tests for MergeService."""

import asyncio
import copy
from uuid import uuid4

import pytest
from sqlalchemy.exc import IntegrityError

from unid.domain.error import (
    ConflictError,
    InvalidClaimError,
    NotFoundError,
    SameIdentityError,
    UnauthorizedError,
)
from unid.domain.model import CascadePlan, CascadeStep, Identity
from unid.domain.repository import IdentityRepository, UnitOfWork
from unid.domain.service import BindingService, MergeService, authorize_merge
from unid.domain.value import IdentityClaim, IdentityKey, UniversalId
from unid.persistence.repository.inmemory import (
    InMemoryCascadeRepository,
    InMemoryIdentityRepository,
    InMemoryStore,
)
from tests.conftest import bound_methods, claim_for, make_identity, seed_identity
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no database needed
unit_env = create_env_fixture()


def seed_dependents(store: InMemoryStore, identity: Identity) -> None:
    """One row per dependent table referencing the identity."""
    store.records["tokens"].append({"id": uuid4(), "user": identity.name})
    store.records["sessions"].append(
        {"id": uuid4(), "owner": identity.owner, "name": identity.name}
    )
    store.records["verification_records"].append(
        {"id": uuid4(), "user": identity.qualified_name.root}
    )
    for table in ("resources", "payments", "transactions", "subscriptions"):
        store.records[table].append({"id": uuid4(), "user": identity.name})


def snapshot(store: InMemoryStore) -> dict:
    return copy.deepcopy(store.__dict__)


async def build_merge_service(unit_env, cascade_repository=None, identity_repository=None):
    store = await unit_env.get(InMemoryStore)
    return MergeService(
        identity_repository=identity_repository or await unit_env.get(IdentityRepository),
        binding_service=await unit_env.get(BindingService),
        cascade_repository=cascade_repository or InMemoryCascadeRepository(store),
        unit_of_work=await unit_env.get(UnitOfWork),
        cascade_plan=CascadePlan.default(),
    )


class TestMerge:
    """Tests for the merge flow."""

    @pytest.mark.asyncio
    async def test_merge_transfers_methods_and_deletes_identity(self, unit_env):
        """Methods new to the survivor move over and the other identity is gone."""
        # Arrange
        merge_service = await unit_env.get(MergeService)
        store = await unit_env.get(InMemoryStore)
        a = await make_identity(unit_env, "acme", "a", "email:a@x.com")
        b = await make_identity(unit_env, "acme", "b", "email:b@x.com", "phone:555-0100")

        # Act
        result = await merge_service.merge(claim_for(a), claim_for(a), claim_for(b))

        # Assert
        assert result.universal_id == a.universal_id
        assert result.deleted_universal_id == b.universal_id
        assert [str(m) for m in result.transferred_methods] == [
            "email:b@x.com",
            "phone:555-0100",
        ]
        assert bound_methods(store, a.universal_id) == {
            "email:a@x.com",
            "email:b@x.com",
            "phone:555-0100",
        }
        assert b.universal_id not in store.identities
        assert bound_methods(store, b.universal_id) == set()

    @pytest.mark.asyncio
    async def test_merge_skips_method_survivor_already_owns(self, unit_env):
        """A method held by both sides stays single and is not reported."""
        # Arrange
        merge_service = await unit_env.get(MergeService)
        store = await unit_env.get(InMemoryStore)
        a = seed_identity(store, "acme", "a", "email:a@x.com", "github:alice")
        b = seed_identity(store, "acme", "b", "github:alice", "phone:555-0100")

        # Act
        result = await merge_service.merge(claim_for(a), claim_for(a), claim_for(b))

        # Assert
        assert [str(m) for m in result.transferred_methods] == ["phone:555-0100"]
        github = [x for x in store.bindings if str(x.method) == "github:alice"]
        assert len(github) == 1
        assert github[0].universal_id == a.universal_id

    @pytest.mark.asyncio
    async def test_merge_all_duplicates_transfers_nothing(self, unit_env):
        """All-duplicate bindings yield an empty transfer and still delete."""
        # Arrange
        merge_service = await unit_env.get(MergeService)
        store = await unit_env.get(InMemoryStore)
        a = seed_identity(store, "acme", "a", "github:alice", "email:a@x.com")
        b = seed_identity(store, "acme", "b", "github:alice", "email:a@x.com")

        # Act
        result = await merge_service.merge(claim_for(b), claim_for(a), claim_for(b))

        # Assert
        assert result.transferred_methods == []
        assert b.universal_id not in store.identities
        assert bound_methods(store, a.universal_id) == {"github:alice", "email:a@x.com"}
        assert len(store.bindings) == 2

    @pytest.mark.asyncio
    async def test_merge_initiated_by_deleted_side_is_allowed(self, unit_env):
        """The caller may be the identity that goes away."""
        merge_service = await unit_env.get(MergeService)
        a = await make_identity(unit_env, "acme", "a", "email:a@x.com")
        b = await make_identity(unit_env, "acme", "b", "email:b@x.com")

        result = await merge_service.merge(claim_for(b), claim_for(a), claim_for(b))

        assert result.universal_id == a.universal_id

    @pytest.mark.asyncio
    async def test_merge_clears_dependent_records_of_deleted_identity(self, unit_env):
        """Cascade tables lose the deleted identity's rows; audit rows are kept."""
        # Arrange
        merge_service = await unit_env.get(MergeService)
        store = await unit_env.get(InMemoryStore)
        a = await make_identity(unit_env, "acme", "a", "email:a@x.com")
        b = await make_identity(unit_env, "acme", "b", "email:b@x.com")
        seed_dependents(store, a)
        seed_dependents(store, b)
        store.records["audit_records"] = [{"id": uuid4(), "user": b.name}]

        # Act
        await merge_service.merge(claim_for(a), claim_for(a), claim_for(b))

        # Assert
        for table, rows in store.records.items():
            assert len(rows) == 1, table
        assert store.records["tokens"][0]["user"] == "a"
        assert store.records["verification_records"][0]["user"] == "acme/a"

    @pytest.mark.asyncio
    async def test_merge_session_cascade_matches_owner_and_name(self, unit_env):
        """A same-named account in another organization keeps its sessions."""
        merge_service = await unit_env.get(MergeService)
        store = await unit_env.get(InMemoryStore)
        a = await make_identity(unit_env, "acme", "a", "email:a@x.com")
        b = await make_identity(unit_env, "acme", "b", "email:b@x.com")
        store.records["sessions"].append({"id": uuid4(), "owner": "other", "name": "b"})

        await merge_service.merge(claim_for(a), claim_for(a), claim_for(b))

        assert store.records["sessions"] == [
            {"id": store.records["sessions"][0]["id"], "owner": "other", "name": "b"}
        ]


class TestMergePreconditions:
    """Tests for checks that run before anything is changed."""

    @pytest.mark.asyncio
    async def test_merge_with_self_raises_same_identity(self, unit_env):
        """An identity cannot be merged into itself."""
        merge_service = await unit_env.get(MergeService)
        store = await unit_env.get(InMemoryStore)
        a = await make_identity(unit_env, "acme", "a", "email:a@x.com")
        before = snapshot(store)

        with pytest.raises(SameIdentityError):
            await merge_service.merge(claim_for(a), claim_for(a), claim_for(a))

        assert snapshot(store) == before

    @pytest.mark.asyncio
    async def test_merge_with_unknown_identity_raises_invalid_claim(self, unit_env):
        """A claim naming no identity is rejected."""
        merge_service = await unit_env.get(MergeService)
        a = await make_identity(unit_env, "acme", "a", "email:a@x.com")
        ghost = IdentityClaim(universal_id=UniversalId(uuid4()), owner="acme", name="ghost")

        with pytest.raises(InvalidClaimError):
            await merge_service.merge(claim_for(a), claim_for(a), ghost)

    @pytest.mark.asyncio
    async def test_invalid_claim_checked_before_same_identity(self, unit_env):
        """Two claims for the same missing identity fail as invalid, not same."""
        merge_service = await unit_env.get(MergeService)
        ghost = IdentityClaim(universal_id=UniversalId(uuid4()), owner="acme", name="ghost")

        with pytest.raises(InvalidClaimError):
            await merge_service.merge(ghost, ghost, ghost)

    @pytest.mark.asyncio
    async def test_merge_by_outsider_raises_unauthorized_and_changes_nothing(
        self, unit_env
    ):
        """A caller who is neither party cannot merge."""
        # Arrange
        merge_service = await unit_env.get(MergeService)
        store = await unit_env.get(InMemoryStore)
        a = await make_identity(unit_env, "acme", "a", "email:a@x.com")
        b = await make_identity(unit_env, "acme", "b", "email:b@x.com")
        c = await make_identity(unit_env, "acme", "c", "email:c@x.com")
        seed_dependents(store, b)
        before = snapshot(store)

        # Act & Assert
        with pytest.raises(UnauthorizedError):
            await merge_service.merge(claim_for(c), claim_for(a), claim_for(b))

        assert snapshot(store) == before


class TestMergeAtomicity:
    """Tests that a failing merge leaves no trace."""

    @pytest.mark.asyncio
    async def test_failing_cascade_step_rolls_back_everything(self, unit_env):
        """A dependent-table failure undoes transfers, deletes and earlier steps."""

        class FailingCascadeRepository(InMemoryCascadeRepository):
            async def delete_for_identity(self, step, identity):
                if step.table == "payments":
                    raise RuntimeError("payments table unavailable")
                return await super().delete_for_identity(step, identity)

        # Arrange
        store = await unit_env.get(InMemoryStore)
        merge_service = await build_merge_service(
            unit_env, cascade_repository=FailingCascadeRepository(store)
        )
        a = await make_identity(unit_env, "acme", "a", "email:a@x.com")
        b = await make_identity(unit_env, "acme", "b", "email:b@x.com", "phone:555-0100")
        seed_dependents(store, a)
        seed_dependents(store, b)
        before = snapshot(store)

        # Act
        with pytest.raises(RuntimeError):
            await merge_service.merge(claim_for(a), claim_for(a), claim_for(b))

        # Assert
        assert snapshot(store) == before
        assert bound_methods(store, b.universal_id) == {"email:b@x.com", "phone:555-0100"}
        assert len(store.records["tokens"]) == 2

    @pytest.mark.asyncio
    async def test_identity_removed_concurrently_raises_not_found(self, unit_env):
        """If the deleted identity is already gone at delete time, nothing commits."""

        class RacedIdentityRepository(InMemoryIdentityRepository):
            async def delete(self, universal_id):
                return False

        # Arrange
        store = await unit_env.get(InMemoryStore)
        merge_service = await build_merge_service(
            unit_env, identity_repository=RacedIdentityRepository(store)
        )
        a = await make_identity(unit_env, "acme", "a", "email:a@x.com")
        b = await make_identity(unit_env, "acme", "b", "email:b@x.com")
        before = snapshot(store)

        # Act & Assert
        with pytest.raises(NotFoundError):
            await merge_service.merge(claim_for(a), claim_for(a), claim_for(b))

        assert snapshot(store) == before

    @pytest.mark.asyncio
    async def test_uniqueness_violation_at_flush_raises_conflict(self, unit_env):
        """A constraint violation surfacing late in the merge rolls it all back."""

        class ViolatingIdentityRepository(InMemoryIdentityRepository):
            async def delete(self, universal_id):
                await super().delete(universal_id)
                raise IntegrityError(
                    "duplicate key violates uq_identity_binding_method", None, Exception()
                )

        # Arrange
        store = await unit_env.get(InMemoryStore)
        merge_service = await build_merge_service(
            unit_env, identity_repository=ViolatingIdentityRepository(store)
        )
        a = await make_identity(unit_env, "acme", "a", "email:a@x.com")
        b = await make_identity(unit_env, "acme", "b", "email:b@x.com", "phone:555-0100")
        seed_dependents(store, b)
        before = snapshot(store)

        # Act & Assert
        with pytest.raises(ConflictError):
            await merge_service.merge(claim_for(a), claim_for(a), claim_for(b))

        assert snapshot(store) == before
        assert b.universal_id in store.identities

    @pytest.mark.asyncio
    async def test_cancelled_cascade_rolls_back_everything(self, unit_env):
        """Cancellation mid-merge leaves the store as it was."""

        class CancelledCascadeRepository(InMemoryCascadeRepository):
            async def delete_for_identity(self, step, identity):
                if step.table == "resources":
                    raise asyncio.CancelledError()
                return await super().delete_for_identity(step, identity)

        # Arrange
        store = await unit_env.get(InMemoryStore)
        merge_service = await build_merge_service(
            unit_env, cascade_repository=CancelledCascadeRepository(store)
        )
        a = await make_identity(unit_env, "acme", "a", "email:a@x.com")
        b = await make_identity(unit_env, "acme", "b", "email:b@x.com")
        seed_dependents(store, b)
        before = snapshot(store)

        # Act & Assert
        with pytest.raises(asyncio.CancelledError):
            await merge_service.merge(claim_for(a), claim_for(a), claim_for(b))

        assert snapshot(store) == before

    @pytest.mark.asyncio
    async def test_second_merge_of_same_identity_fails(self, unit_env):
        """Once merged away, an identity cannot take part in another merge."""
        merge_service = await unit_env.get(MergeService)
        a = await make_identity(unit_env, "acme", "a", "email:a@x.com")
        b = await make_identity(unit_env, "acme", "b", "email:b@x.com")
        c = await make_identity(unit_env, "acme", "c", "email:c@x.com")
        await merge_service.merge(claim_for(a), claim_for(a), claim_for(b))

        with pytest.raises(InvalidClaimError):
            await merge_service.merge(claim_for(c), claim_for(c), claim_for(b))


class TestAuthorizeMerge:
    """Tests for the merge authorization predicate."""

    def _identity(self, name: str) -> Identity:
        return Identity(universal_id=UniversalId(uuid4()), owner="acme", name=name)

    def test_reserved_caller_is_allowed(self):
        a, b = self._identity("a"), self._identity("b")

        decision = authorize_merge(claim_for(a), a, b)

        assert decision.allowed

    def test_deleted_caller_is_allowed(self):
        a, b = self._identity("a"), self._identity("b")

        assert authorize_merge(claim_for(b), a, b).allowed

    def test_outsider_is_denied_with_reason(self):
        a, b, c = self._identity("a"), self._identity("b"), self._identity("c")

        decision = authorize_merge(claim_for(c), a, b)

        assert not decision.allowed
        assert "neither" in decision.reason

    def test_same_name_in_claim_does_not_authorize(self):
        """Only the universal id counts, not the account name in the token."""
        a, b = self._identity("a"), self._identity("b")
        forged = IdentityClaim(universal_id=UniversalId(uuid4()), owner="acme", name="a")

        assert not authorize_merge(forged, a, b).allowed


class TestCascadePlan:
    """Tests for the default cascade plan."""

    def test_default_plan_covers_dependent_domains_in_order(self):
        plan = CascadePlan.default()

        assert [step.table for step in plan.steps] == [
            "tokens",
            "sessions",
            "verification_records",
            "resources",
            "payments",
            "transactions",
            "subscriptions",
        ]

    def test_step_requires_a_key(self):
        with pytest.raises(ValueError):
            CascadeStep(table="tokens", keys={})

    def test_sessions_match_on_owner_and_name(self):
        sessions = CascadePlan.default().steps[1]

        assert sessions.keys == {"owner": IdentityKey.OWNER, "name": IdentityKey.NAME}
