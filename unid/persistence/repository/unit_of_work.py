"""Unit of work implementation over a SQLAlchemy session."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import logfire
from sqlalchemy.ext.asyncio import AsyncSession

from unid.domain.repository.unit_of_work import UnitOfWork


class PostgresUnitOfWork(UnitOfWork):
    """Transaction scope over the request's session.

    The outermost ``transaction()`` commits the session when its block
    completes. Nested scopes become savepoints.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize unit of work with database session.

        Args:
            session: SQLAlchemy async session shared with the repositories
        """
        self.session = session
        self._depth = 0

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        if self._depth:
            self._depth += 1
            try:
                async with self.session.begin_nested():
                    yield
            finally:
                self._depth -= 1
            return

        self._depth = 1
        try:
            yield
            await self.session.commit()
        except BaseException as e:
            # Includes cancellation: nothing of the block may survive
            logfire.warn("Transaction rolled back", error=repr(e))
            await self.session.rollback()
            raise
        finally:
            self._depth = 0
