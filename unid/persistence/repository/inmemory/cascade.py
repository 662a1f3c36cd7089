"""In-memory cascade repository for testing."""

from unid.domain.model.cascade import CascadeStep
from unid.domain.model.identity import Identity
from unid.domain.repository.cascade import CascadeRepository
from unid.util.error import ConfigurationError

from .store import InMemoryStore


class InMemoryCascadeRepository(CascadeRepository):
    """In-memory implementation of CascadeRepository for testing."""

    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    async def delete_for_identity(self, step: CascadeStep, identity: Identity) -> int:
        """Delete the matching rows of one dependent table."""
        if step.table not in self._store.records:
            raise ConfigurationError(f"Cascade step names unknown table {step.table!r}")

        match = {column: identity.key_value(key) for column, key in step.keys.items()}
        rows = self._store.records[step.table]
        kept = [
            row
            for row in rows
            if any(row.get(column) != value for column, value in match.items())
        ]
        self._store.records[step.table] = kept
        return len(rows) - len(kept)
