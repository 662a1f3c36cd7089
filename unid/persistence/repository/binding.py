"""Binding repository implementation using PostgreSQL."""

from typing import Optional

from sqlalchemy import and_, select
from sqlalchemy.ext.asyncio import AsyncSession

from unid.domain.model.binding import Binding
from unid.domain.repository.binding import BindingRepository
from unid.domain.value import AuthType, BindingId, UniversalId
from unid.persistence.mappers import binding_to_dict, row_to_binding
from unid.persistence.tables import identity_bindings_table


class PostgresBindingRepository(BindingRepository):
    """PostgreSQL implementation of BindingRepository.

    Uniqueness of ``(auth_type, auth_value)`` is enforced by the
    ``uq_identity_binding_method`` constraint.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, binding_id: BindingId) -> Optional[Binding]:
        """Get binding by ID."""
        stmt = select(identity_bindings_table).where(
            identity_bindings_table.c.id == binding_id
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()

        if not row:
            return None

        return row_to_binding(dict(row))

    async def find_by_method(
        self, auth_type: AuthType, auth_value: str
    ) -> Optional[Binding]:
        """Get the binding owning a method.

        Args:
            auth_type: Authentication method type
            auth_value: Value identifying the user for that type

        Returns:
            Binding if found, None otherwise
        """
        stmt = select(identity_bindings_table).where(
            identity_bindings_table.c.auth_type == auth_type.value,
            identity_bindings_table.c.auth_value == auth_value,
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()

        if not row:
            return None

        return row_to_binding(dict(row))

    async def find_all_by_universal_id(self, universal_id: UniversalId) -> list[Binding]:
        """Find all bindings of an identity, oldest first."""
        stmt = (
            select(identity_bindings_table)
            .where(identity_bindings_table.c.universal_id == universal_id)
            .order_by(identity_bindings_table.c.created_at, identity_bindings_table.c.id)
        )
        result = await self.session.execute(stmt)
        rows = result.mappings().all()

        return [row_to_binding(dict(row)) for row in rows]

    async def exists_for_identity(
        self, universal_id: UniversalId, auth_type: AuthType, auth_value: str
    ) -> bool:
        """Check if an identity owns the given method."""
        stmt = select(identity_bindings_table.c.id).where(
            and_(
                identity_bindings_table.c.universal_id == universal_id,
                identity_bindings_table.c.auth_type == auth_type.value,
                identity_bindings_table.c.auth_value == auth_value,
            )
        )
        result = await self.session.execute(stmt)
        return result.first() is not None

    async def insert(self, binding: Binding) -> Binding:
        """Insert a new binding.

        Raises:
            IntegrityError: If the method is already bound
        """
        stmt = identity_bindings_table.insert().values(**binding_to_dict(binding))
        await self.session.execute(stmt)
        await self.session.flush()
        return binding

    async def delete(self, binding_id: BindingId) -> bool:
        """Delete binding, returning whether a row was removed."""
        stmt = identity_bindings_table.delete().where(
            identity_bindings_table.c.id == binding_id
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

    async def delete_all_by_universal_id(self, universal_id: UniversalId) -> int:
        """Delete every binding of an identity.

        Returns:
            Number of deleted rows
        """
        stmt = identity_bindings_table.delete().where(
            identity_bindings_table.c.universal_id == universal_id
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
