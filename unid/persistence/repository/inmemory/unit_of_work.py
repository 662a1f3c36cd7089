"""In-memory unit of work for testing."""

import copy
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from unid.domain.repository.unit_of_work import UnitOfWork

from .store import InMemoryStore


class InMemoryUnitOfWork(UnitOfWork):
    """Snapshots the store on entry and restores it if the block raises."""

    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        snapshot = copy.deepcopy(self._store.__dict__)
        try:
            yield
        except BaseException:
            self._store.__dict__.update(snapshot)
            raise
