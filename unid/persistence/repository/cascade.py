"""Cascade repository implementation using PostgreSQL."""

from sqlalchemy import Table, and_
from sqlalchemy.ext.asyncio import AsyncSession

from unid.domain.model.cascade import CascadeStep
from unid.domain.model.identity import Identity
from unid.domain.repository.cascade import CascadeRepository
from unid.persistence.tables import metadata
from unid.util.error import ConfigurationError


class PostgresCascadeRepository(CascadeRepository):
    """Bulk deletes over the dependent tables declared in the table metadata."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    def _table(self, step: CascadeStep) -> Table:
        table = metadata.tables.get(step.table)
        if table is None:
            raise ConfigurationError(f"Cascade step names unknown table {step.table!r}")
        missing = [column for column in step.keys if column not in table.c]
        if missing:
            raise ConfigurationError(
                f"Cascade step for {step.table!r} names unknown columns {missing}"
            )
        return table

    async def delete_for_identity(self, step: CascadeStep, identity: Identity) -> int:
        """Delete the rows of one dependent table that reference an identity.

        Args:
            step: Table and key columns to match
            identity: The identity being removed

        Returns:
            Number of deleted rows
        """
        table = self._table(step)
        conditions = [
            table.c[column] == identity.key_value(key)
            for column, key in step.keys.items()
        ]
        stmt = table.delete().where(and_(*conditions))
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
