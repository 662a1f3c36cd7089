"""Binding repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from unid.domain.model.binding import Binding
from unid.domain.value import AuthType, BindingId, UniversalId


class BindingRepository(ABC):
    """Repository for Binding entity.

    Manages the association between identities and their authentication
    methods. Implementations must enforce uniqueness of
    ``(auth_type, auth_value)`` at the storage level.
    """

    @abstractmethod
    async def find_by_id(self, binding_id: BindingId) -> Optional[Binding]:
        """Find a binding by ID.

        Args:
            binding_id: The binding's unique identifier

        Returns:
            The binding if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_method(
        self, auth_type: AuthType, auth_value: str
    ) -> Optional[Binding]:
        """Find the binding that owns an authentication method.

        Args:
            auth_type: Authentication method type
            auth_value: Value identifying the user for that type

        Returns:
            The binding if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_all_by_universal_id(self, universal_id: UniversalId) -> list[Binding]:
        """Get all bindings of an identity, oldest first.

        Args:
            universal_id: The identity's universal identifier

        Returns:
            List of bindings (may be empty)
        """
        pass

    @abstractmethod
    async def exists_for_identity(
        self, universal_id: UniversalId, auth_type: AuthType, auth_value: str
    ) -> bool:
        """Check whether an identity owns a specific method.

        Args:
            universal_id: The identity's universal identifier
            auth_type: Authentication method type
            auth_value: Value identifying the user for that type

        Returns:
            True if the identity owns the method, False otherwise
        """
        pass

    @abstractmethod
    async def insert(self, binding: Binding) -> Binding:
        """Insert a new binding.

        Args:
            binding: The binding to insert

        Returns:
            The inserted binding

        Raises:
            IntegrityError: If the method is already bound (uniqueness violation)
        """
        pass

    @abstractmethod
    async def delete(self, binding_id: BindingId) -> bool:
        """Delete a binding.

        Args:
            binding_id: The binding to delete

        Returns:
            True if a row was deleted, False otherwise
        """
        pass

    @abstractmethod
    async def delete_all_by_universal_id(self, universal_id: UniversalId) -> int:
        """Delete every binding of an identity.

        Args:
            universal_id: The identity's universal identifier

        Returns:
            Number of deleted bindings
        """
        pass
