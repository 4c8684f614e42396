"""Atomic unit interface."""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager


class UnitOfWork(ABC):
    """Groups repository writes into one all-or-nothing unit.

    Usage::

        async with unit_of_work.atomic():
            await repo_a.save(...)
            await repo_b.increment(...)

    If the block raises, every write made inside it is undone and the
    exception propagates.
    """

    @abstractmethod
    def atomic(self) -> AbstractAsyncContextManager[None]:
        """Open an atomic unit."""
        pass
