"""Shared state behind the in-memory repositories."""

from typing import Any

from unid.domain.model import Binding, Identity
from unid.domain.value import UniversalId
from unid.persistence.tables import identities_table, identity_bindings_table, metadata


class InMemoryStore:
    """Tables of one in-memory database.

    All in-memory repositories of a container share one store so a unit of
    work can snapshot and restore everything they touched. ``records``
    holds raw rows of the dependent tables, keyed by table name.
    """

    def __init__(self) -> None:
        self.identities: dict[UniversalId, Identity] = {}
        self.bindings: list[Binding] = []
        self.records: dict[str, list[dict[str, Any]]] = {
            name: []
            for name in metadata.tables
            if name not in (identities_table.name, identity_bindings_table.name)
        }
