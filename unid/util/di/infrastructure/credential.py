"""Credential verification infrastructure providers."""

from dishka import Scope, provide

from unid.adapter.credential import HttpCredentialVerifier
from unid.config import Settings
from unid.domain.service import CredentialVerifier
from unid.util.di.base import ProviderBase


class CredentialProvider(ProviderBase):
    """Credential verification component base."""

    __mock_component__ = "credentials"


class ProdCredentialProvider(CredentialProvider):
    """Production credential provider talking to the account service."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_credential_verifier(self, settings: Settings) -> CredentialVerifier:
        """Provide HTTP credential verifier.

        Raises:
            ValueError: If the account service URL is not configured
        """
        if not settings.credentials.base_url:
            raise ValueError("Credential service base URL must be configured")

        return HttpCredentialVerifier(
            check_url=settings.credentials.check_url,
            timeout_seconds=settings.credentials.timeout_seconds,
        )
