"""In-memory atomic unit for testing."""

from contextlib import AbstractAsyncContextManager

from kopiena.domain.repository import UnitOfWork

from .database import InMemoryDatabase


class InMemoryUnitOfWork(UnitOfWork):
    """Atomic unit that snapshots and restores the in-memory database."""

    def __init__(self, database: InMemoryDatabase) -> None:
        self.database = database

    def atomic(self) -> AbstractAsyncContextManager[None]:
        """Open an atomic unit."""
        return self.database.transaction()
