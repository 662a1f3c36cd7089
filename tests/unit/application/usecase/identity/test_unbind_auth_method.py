"""Unit tests for UnbindAuthMethodUseCase."""

import pytest

from unid.application.usecase.identity.unbind_auth_method import (
    UnbindAuthMethodRequest,
    UnbindAuthMethodUseCase,
)
from unid.domain.error import LastMethodError, NotFoundError
from unid.domain.service import JWTService
from unid.domain.value import AuthType
from unid.persistence.repository.inmemory import InMemoryStore
from tests.conftest import bound_methods, make_identity
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestUnbindAuthMethodUseCase:
    """Tests for UnbindAuthMethodUseCase."""

    @pytest.mark.asyncio
    async def test_unbind_removes_method(self, unit_env):
        jwt_service = await unit_env.get(JWTService)
        use_case = await unit_env.get(UnbindAuthMethodUseCase)
        store = await unit_env.get(InMemoryStore)
        alice = await make_identity(
            unit_env, "acme", "alice", "email:a@x.com", "github:alice"
        )

        response = await use_case.execute(
            UnbindAuthMethodRequest(
                token=jwt_service.create_token(alice), auth_type=AuthType.GITHUB
            )
        )

        assert response.status == "ok"
        assert response.message == "Unbound github:alice"
        assert bound_methods(store, alice.universal_id) == {"email:a@x.com"}

    @pytest.mark.asyncio
    async def test_unbind_last_method(self, unit_env):
        jwt_service = await unit_env.get(JWTService)
        use_case = await unit_env.get(UnbindAuthMethodUseCase)
        alice = await make_identity(unit_env, "acme", "alice", "email:a@x.com")

        with pytest.raises(LastMethodError):
            await use_case.execute(
                UnbindAuthMethodRequest(
                    token=jwt_service.create_token(alice), auth_type=AuthType.EMAIL
                )
            )

    @pytest.mark.asyncio
    async def test_unbind_type_not_bound(self, unit_env):
        jwt_service = await unit_env.get(JWTService)
        use_case = await unit_env.get(UnbindAuthMethodUseCase)
        alice = await make_identity(
            unit_env, "acme", "alice", "email:a@x.com", "github:alice"
        )

        with pytest.raises(NotFoundError):
            await use_case.execute(
                UnbindAuthMethodRequest(
                    token=jwt_service.create_token(alice), auth_type=AuthType.WECHAT
                )
            )
