"""Cascade repository interface."""

from abc import ABC, abstractmethod

from unid.domain.model.cascade import CascadeStep
from unid.domain.model.identity import Identity


class CascadeRepository(ABC):
    """Bulk deletes over dependent domains that reference an identity."""

    @abstractmethod
    async def delete_for_identity(self, step: CascadeStep, identity: Identity) -> int:
        """Delete every row of ``step.table`` that references the identity.

        Args:
            step: Table and key columns to match
            identity: The identity being removed

        Returns:
            Number of deleted rows
        """
        pass
