"""In-memory identity repository for testing."""

from typing import Optional

from unid.domain.model.identity import Identity
from unid.domain.repository.identity import IdentityRepository
from unid.domain.value import UniversalId

from .store import InMemoryStore


class InMemoryIdentityRepository(IdentityRepository):
    """In-memory implementation of IdentityRepository for testing."""

    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    async def find_by_universal_id(
        self, universal_id: UniversalId, lock: bool = False
    ) -> Optional[Identity]:
        """Find identity by universal ID. Locking is a no-op here."""
        return self._store.identities.get(universal_id)

    async def find_by_owner_and_name(self, owner: str, name: str) -> Optional[Identity]:
        """Find identity by qualified account name."""
        for identity in self._store.identities.values():
            if identity.owner == owner and identity.name == name:
                return identity
        return None

    async def save(self, identity: Identity) -> Identity:
        """Save identity."""
        self._store.identities[identity.universal_id] = identity
        return identity

    async def delete(self, universal_id: UniversalId) -> bool:
        """Delete identity together with its bindings, like the FK cascade."""
        if self._store.identities.pop(universal_id, None) is None:
            return False
        self._store.bindings = [
            b for b in self._store.bindings if b.universal_id != universal_id
        ]
        return True
