"""Base use case."""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

RequestT = TypeVar("RequestT")
ResponseT = TypeVar("ResponseT")


class BaseUseCase(ABC, Generic[RequestT, ResponseT]):
    """One request/response exchange over the domain services.

    Use cases own role checks and DTO mapping. Taxonomy rules stay in the
    domain services they call.
    """

    @abstractmethod
    async def execute(self, request: RequestT) -> ResponseT:
        pass
