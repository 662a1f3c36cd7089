"""Integration tests for the PostgreSQL repositories.

These tests need a migrated PostgreSQL database reachable through the
DATABASE__URL setting.
"""

from uuid import uuid4

import pytest
from sqlalchemy.exc import IntegrityError

from unid.domain.model import Binding, Identity
from unid.domain.repository import (
    BindingRepository,
    IdentityRepository,
    UnitOfWork,
)
from unid.domain.value import AuthType, BindingId, UniversalId
from tests.harness import create_env_fixture

# Integration test fixture
integration_env = create_env_fixture(unmock={"persistence"})


def new_identity() -> Identity:
    suffix = uuid4().hex[:8]
    return Identity(universal_id=UniversalId(uuid4()), owner="it", name=f"user-{suffix}")


def new_binding(identity: Identity, auth_type: AuthType, auth_value: str) -> Binding:
    return Binding(
        id=BindingId(uuid4()),
        universal_id=identity.universal_id,
        auth_type=auth_type,
        auth_value=auth_value,
    )


@pytest.mark.integration
class TestPostgresRepositories:
    """Integration tests for the identity and binding repositories."""

    @pytest.mark.asyncio
    async def test_duplicate_method_violates_unique_constraint(self, integration_env):
        # Arrange
        identity_repo = await integration_env.get(IdentityRepository)
        binding_repo = await integration_env.get(BindingRepository)
        unit_of_work = await integration_env.get(UnitOfWork)
        first, second = new_identity(), new_identity()
        value = f"{uuid4().hex}@x.com"
        async with unit_of_work.transaction():
            await identity_repo.save(first)
            await identity_repo.save(second)
            await binding_repo.insert(new_binding(first, AuthType.EMAIL, value))

        # Act & Assert
        with pytest.raises(IntegrityError):
            async with unit_of_work.transaction():
                await binding_repo.insert(new_binding(second, AuthType.EMAIL, value))

        owner = await binding_repo.find_by_method(AuthType.EMAIL, value)
        assert owner is not None
        assert owner.universal_id == first.universal_id

    @pytest.mark.asyncio
    async def test_deleting_identity_removes_its_bindings(self, integration_env):
        identity_repo = await integration_env.get(IdentityRepository)
        binding_repo = await integration_env.get(BindingRepository)
        unit_of_work = await integration_env.get(UnitOfWork)
        identity = new_identity()
        async with unit_of_work.transaction():
            await identity_repo.save(identity)
            await binding_repo.insert(new_binding(identity, AuthType.GITHUB, uuid4().hex))

        async with unit_of_work.transaction():
            assert await identity_repo.delete(identity.universal_id)

        assert await binding_repo.find_all_by_universal_id(identity.universal_id) == []
        assert not await identity_repo.delete(identity.universal_id)
