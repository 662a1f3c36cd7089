"""Mock credential providers for testing."""

from dishka import Scope, provide

from unid.adapter.credential import MockCredentialVerifier
from unid.domain.service import CredentialVerifier
from unid.util.di.infrastructure.credential import CredentialProvider


class MockCredentialProvider(CredentialProvider):
    """Mock credential provider with an in-memory account table."""

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_credential_verifier(self) -> CredentialVerifier:
        """Provide mock credential verifier."""
        return MockCredentialVerifier()
