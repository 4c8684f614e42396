"""PostgreSQL atomic unit backed by SAVEPOINTs."""

from contextlib import asynccontextmanager
from typing import AsyncIterator

import logfire
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from kopiena.domain.error import StorageError
from kopiena.domain.repository import UnitOfWork


class PostgresUnitOfWork(UnitOfWork):
    """Runs a block of writes inside a SAVEPOINT of the request transaction.

    The request-scoped session commits once at the end of the request. A
    failing block rolls back to its savepoint only, so the request can
    still report the error (or carry on) with a usable transaction.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize with the request's database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    @asynccontextmanager
    async def atomic(self) -> AsyncIterator[None]:
        """Open a savepoint; release it on success, roll back on error."""
        try:
            savepoint = await self.session.begin_nested()
        except SQLAlchemyError as e:
            raise StorageError(str(e)) from e

        try:
            yield
        except BaseException:
            if savepoint.is_active:
                await savepoint.rollback()
            logfire.debug("Atomic unit rolled back")
            raise

        try:
            await savepoint.commit()
        except SQLAlchemyError as e:
            raise StorageError(str(e)) from e
