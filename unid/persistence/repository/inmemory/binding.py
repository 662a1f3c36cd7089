"""In-memory binding repository for testing."""

from typing import Optional

from sqlalchemy.exc import IntegrityError

from unid.domain.model.binding import Binding
from unid.domain.repository.binding import BindingRepository
from unid.domain.value import AuthType, BindingId, UniversalId

from .store import InMemoryStore


class InMemoryBindingRepository(BindingRepository):
    """In-memory implementation of BindingRepository for testing."""

    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    async def find_by_id(self, binding_id: BindingId) -> Optional[Binding]:
        """Find binding by ID."""
        for binding in self._store.bindings:
            if binding.id == binding_id:
                return binding
        return None

    async def find_by_method(
        self, auth_type: AuthType, auth_value: str
    ) -> Optional[Binding]:
        """Find the binding owning a method."""
        for binding in self._store.bindings:
            if binding.auth_type == auth_type and binding.auth_value == auth_value:
                return binding
        return None

    async def find_all_by_universal_id(self, universal_id: UniversalId) -> list[Binding]:
        """Find all bindings of an identity, oldest first, ties broken by id."""
        matches = [b for b in self._store.bindings if b.universal_id == universal_id]
        matches.sort(key=lambda b: (b.created_at, b.id))
        return matches

    async def exists_for_identity(
        self, universal_id: UniversalId, auth_type: AuthType, auth_value: str
    ) -> bool:
        """Check if an identity owns the given method."""
        return any(
            b.universal_id == universal_id
            and b.auth_type == auth_type
            and b.auth_value == auth_value
            for b in self._store.bindings
        )

    async def insert(self, binding: Binding) -> Binding:
        """Insert binding.

        Raises:
            IntegrityError: If the method is already bound (simulates the
                unique constraint)
        """
        if any(
            b.auth_type == binding.auth_type and b.auth_value == binding.auth_value
            for b in self._store.bindings
        ):
            raise IntegrityError("Duplicate identity binding", None, Exception())
        self._store.bindings.append(binding)
        return binding

    async def delete(self, binding_id: BindingId) -> bool:
        """Delete binding."""
        before = len(self._store.bindings)
        self._store.bindings = [b for b in self._store.bindings if b.id != binding_id]
        return len(self._store.bindings) < before

    async def delete_all_by_universal_id(self, universal_id: UniversalId) -> int:
        """Delete every binding of an identity."""
        before = len(self._store.bindings)
        self._store.bindings = [
            b for b in self._store.bindings if b.universal_id != universal_id
        ]
        return before - len(self._store.bindings)
