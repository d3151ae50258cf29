"""Use case base."""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

RequestT = TypeVar("RequestT")
ResponseT = TypeVar("ResponseT")


class BaseUseCase(ABC, Generic[RequestT, ResponseT]):
    """One user-facing operation, composed from domain services."""

    @abstractmethod
    async def execute(self, request: RequestT) -> ResponseT:
        """Run the operation."""
