"""Identity repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from unid.domain.model.identity import Identity
from unid.domain.value import UniversalId


class IdentityRepository(ABC):
    """Repository for Identity aggregate.

    Defines the contract for identity persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_universal_id(
        self, universal_id: UniversalId, lock: bool = False
    ) -> Optional[Identity]:
        """Find an identity by universal ID.

        Args:
            universal_id: The identity's universal identifier
            lock: Lock the row until the current transaction ends

        Returns:
            The identity if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_owner_and_name(self, owner: str, name: str) -> Optional[Identity]:
        """Find an identity by its qualified account name.

        Args:
            owner: Owning organization
            name: Account name inside the organization

        Returns:
            The identity if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, identity: Identity) -> Identity:
        """Save an identity (create or update).

        Args:
            identity: The identity to save

        Returns:
            The saved identity
        """
        pass

    @abstractmethod
    async def delete(self, universal_id: UniversalId) -> bool:
        """Delete an identity.

        Args:
            universal_id: The identity to delete

        Returns:
            True if a row was deleted, False if it was already gone
        """
        pass
