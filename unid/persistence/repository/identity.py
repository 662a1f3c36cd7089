"""Identity repository implementation using PostgreSQL."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from unid.domain.model.identity import Identity
from unid.domain.repository.identity import IdentityRepository
from unid.domain.value import UniversalId
from unid.persistence.mappers import identity_to_dict, row_to_identity
from unid.persistence.tables import identities_table


class PostgresIdentityRepository(IdentityRepository):
    """PostgreSQL implementation of IdentityRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_universal_id(
        self, universal_id: UniversalId, lock: bool = False
    ) -> Optional[Identity]:
        """Get identity by universal ID, optionally locking its row.

        Args:
            universal_id: Identity ID to look up
            lock: Take a row lock (``SELECT ... FOR UPDATE``)

        Returns:
            Identity if found, None otherwise
        """
        stmt = select(identities_table).where(
            identities_table.c.universal_id == universal_id
        )
        if lock:
            stmt = stmt.with_for_update()
        result = await self.session.execute(stmt)
        row = result.mappings().first()

        if not row:
            return None

        return row_to_identity(dict(row))

    async def find_by_owner_and_name(self, owner: str, name: str) -> Optional[Identity]:
        """Get identity by qualified account name."""
        stmt = select(identities_table).where(
            identities_table.c.owner == owner,
            identities_table.c.name == name,
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()

        if not row:
            return None

        return row_to_identity(dict(row))

    async def save(self, identity: Identity) -> Identity:
        """Save identity to database.

        Args:
            identity: Identity to save

        Returns:
            Saved identity
        """
        identity_dict = identity_to_dict(identity)

        existing = await self.find_by_universal_id(identity.universal_id)

        if existing:
            stmt = (
                identities_table.update()
                .where(identities_table.c.universal_id == identity.universal_id)
                .values(**identity_dict)
            )
        else:
            stmt = identities_table.insert().values(**identity_dict)
        await self.session.execute(stmt)

        await self.session.flush()
        return identity

    async def delete(self, universal_id: UniversalId) -> bool:
        """Delete identity.

        Args:
            universal_id: Identity ID to delete

        Returns:
            True if a row was deleted
        """
        stmt = identities_table.delete().where(
            identities_table.c.universal_id == universal_id
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0
