"""Unit tests for GetIdentityInfoUseCase."""

import pytest

from unid.application.usecase.identity.get_identity_info import (
    GetIdentityInfoRequest,
    GetIdentityInfoUseCase,
)
from unid.domain.error import InvalidClaimError
from unid.domain.service import JWTService
from unid.persistence.repository.inmemory import InMemoryStore
from tests.conftest import make_identity
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestGetIdentityInfoUseCase:
    """Tests for GetIdentityInfoUseCase."""

    @pytest.mark.asyncio
    async def test_returns_identity_and_methods(self, unit_env):
        jwt_service = await unit_env.get(JWTService)
        use_case = await unit_env.get(GetIdentityInfoUseCase)
        alice = await make_identity(
            unit_env, "acme", "alice", "password:acme/alice", "github:alice"
        )

        response = await use_case.execute(
            GetIdentityInfoRequest(token=jwt_service.create_token(alice))
        )

        assert response.universal_id == str(alice.universal_id)
        assert (response.owner, response.name) == ("acme", "alice")
        assert [str(m) for m in response.bound_auth_methods] == [
            "password:acme/alice",
            "github:alice",
        ]

    @pytest.mark.asyncio
    async def test_token_of_deleted_identity_is_invalid(self, unit_env):
        """A token outlives its identity but no longer resolves."""
        jwt_service = await unit_env.get(JWTService)
        use_case = await unit_env.get(GetIdentityInfoUseCase)
        store = await unit_env.get(InMemoryStore)
        alice = await make_identity(unit_env, "acme", "alice", "github:alice")
        token = jwt_service.create_token(alice)
        del store.identities[alice.universal_id]

        with pytest.raises(InvalidClaimError):
            await use_case.execute(GetIdentityInfoRequest(token=token))
