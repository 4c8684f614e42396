"""Shared plumbing for PostgreSQL repositories."""

from typing import Any

import logfire
from sqlalchemy.engine import Result
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from kopiena.domain.error import DuplicateError, StorageError

# PostgreSQL SQLSTATE for unique_violation
UNIQUE_VIOLATION = "23505"


class PostgresRepository:
    """Base class for repositories backed by an async SQLAlchemy session.

    Every statement goes through ``_execute`` so driver and database errors
    reach the domain as ``StorageError`` (or ``DuplicateError`` for unique
    constraint violations).
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def _execute(self, stmt: Any, flush: bool = False) -> Result[Any]:
        """Execute a statement, translating SQLAlchemy errors.

        Args:
            stmt: SQLAlchemy Core statement
            flush: Flush the session after executing (for writes)

        Returns:
            Statement result

        Raises:
            DuplicateError: On a unique constraint violation
            StorageError: On any other database failure
        """
        try:
            result = await self.session.execute(stmt)
            if flush:
                await self.session.flush()
            return result
        except IntegrityError as e:
            if getattr(e.orig, "sqlstate", None) == UNIQUE_VIOLATION:
                raise DuplicateError("Record already exists") from e
            logfire.error("Integrity error", error=str(e.orig))
            raise StorageError(str(e.orig)) from e
        except SQLAlchemyError as e:
            logfire.error("Database error", error=str(e))
            raise StorageError(str(e)) from e
