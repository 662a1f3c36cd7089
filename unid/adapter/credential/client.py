"""Credential verification clients.

Password logins are checked by the account service that owns the stored
credentials; this service never sees password hashes.
"""

import httpx
import logfire

from unid.adapter.error import CredentialServiceError
from unid.domain.error import AuthFailedError
from unid.domain.service.login_service import CredentialVerifier
from unid.domain.value import VerifiedAccount


class HttpCredentialVerifier(CredentialVerifier):
    """Checks credentials against the account service over HTTP."""

    def __init__(self, check_url: str, timeout_seconds: float = 5.0) -> None:
        """Initialize HTTP credential verifier.

        Args:
            check_url: Full URL of the account service's credential check
            timeout_seconds: Request timeout
        """
        self.check_url = check_url
        self.timeout_seconds = timeout_seconds

    async def verify(self, owner: str, name: str, secret: str) -> VerifiedAccount:
        """Ask the account service whether the secret matches.

        Args:
            owner: Owning organization
            name: Account name
            secret: Secret supplied by the user

        Returns:
            The account as the service knows it

        Raises:
            AuthFailedError: If the service rejects the credential
            CredentialServiceError: If the service is unreachable or misbehaves
        """
        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    self.check_url,
                    json={"owner": owner, "name": name, "password": secret},
                    timeout=self.timeout_seconds,
                )
        except httpx.HTTPError as e:
            logfire.error("Credential service HTTP error", error=str(e))
            raise CredentialServiceError(f"HTTP error during credential check: {e}")

        if response.status_code in (401, 403):
            logfire.warn("Credential rejected", owner=owner, name=name)
            raise AuthFailedError()

        if response.status_code != 200:
            logfire.error(
                "Credential check failed",
                status_code=response.status_code,
                error=response.text,
            )
            raise CredentialServiceError(
                f"Credential check failed: {response.status_code}"
            )

        try:
            data = response.json()
            account = VerifiedAccount(
                owner=data.get("owner", owner), name=data.get("name", name)
            )
        except (ValueError, AttributeError) as e:
            raise CredentialServiceError(f"Malformed credential check response: {e}")

        logfire.info("Credential accepted", owner=account.owner, name=account.name)
        return account


class MockCredentialVerifier(CredentialVerifier):
    """Mock credential verifier for testing.

    Holds a table of ``owner/name`` to secret without making real calls.
    """

    def __init__(self, accounts: dict[str, str] | None = None) -> None:
        self.accounts: dict[str, str] = dict(accounts or {})

    def add_account(self, owner: str, name: str, secret: str) -> None:
        """Register an account the mock will accept."""
        self.accounts[f"{owner}/{name}"] = secret

    async def verify(self, owner: str, name: str, secret: str) -> VerifiedAccount:
        """Accept the secret only if it matches the registered one.

        Raises:
            AuthFailedError: If the account is unknown or the secret differs
        """
        if self.accounts.get(f"{owner}/{name}") != secret:
            raise AuthFailedError()
        return VerifiedAccount(owner=owner, name=name)
