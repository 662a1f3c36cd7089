"""Unit tests for RegisterIdentityUseCase."""

import pydantic
import pytest

from unid.application.usecase.identity.register_identity import (
    RegisterIdentityRequest,
    RegisterIdentityUseCase,
)
from unid.domain.error import ConflictError, ValidationError
from unid.domain.service import JWTService
from unid.domain.value import AuthMethod, AuthType
from unid.persistence.repository.inmemory import InMemoryStore
from tests.conftest import bound_methods, method
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestRegisterIdentityUseCase:
    """Tests for RegisterIdentityUseCase."""

    @pytest.mark.asyncio
    async def test_register_with_password_binds_canonical_value(self, unit_env):
        """The password value comes from owner/name, never from the client."""
        # Arrange
        use_case = await unit_env.get(RegisterIdentityUseCase)
        jwt_service = await unit_env.get(JWTService)
        store = await unit_env.get(InMemoryStore)

        # Act
        response = await use_case.execute(
            RegisterIdentityRequest(
                owner="acme",
                name="alice",
                methods=[
                    AuthMethod(auth_type=AuthType.PASSWORD, auth_value="acme/mallory"),
                    method("email:alice@x.com"),
                ],
                with_password=True,
            )
        )

        # Assert
        claim = jwt_service.verify_claim(response.token)
        assert str(claim.universal_id) == response.universal_id
        assert [str(m) for m in response.bound_auth_methods] == [
            "password:acme/alice",
            "email:alice@x.com",
        ]
        assert bound_methods(store, claim.universal_id) == {
            "password:acme/alice",
            "email:alice@x.com",
        }

    @pytest.mark.asyncio
    async def test_register_without_any_method(self, unit_env):
        use_case = await unit_env.get(RegisterIdentityUseCase)

        with pytest.raises(ValidationError):
            await use_case.execute(RegisterIdentityRequest(owner="acme", name="alice"))

    @pytest.mark.asyncio
    async def test_register_taken_name(self, unit_env):
        use_case = await unit_env.get(RegisterIdentityUseCase)
        await use_case.execute(
            RegisterIdentityRequest(owner="acme", name="alice", with_password=True)
        )

        with pytest.raises(ConflictError):
            await use_case.execute(
                RegisterIdentityRequest(
                    owner="acme", name="alice", methods=[method("github:alice")]
                )
            )

    def test_name_with_separator_is_rejected(self):
        with pytest.raises(pydantic.ValidationError):
            RegisterIdentityRequest(owner="acme", name="a/b", with_password=True)
