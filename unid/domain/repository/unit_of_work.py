"""Unit of work interface."""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager


class UnitOfWork(ABC):
    """Transaction boundary shared by the repositories of one request.

    Everything done through the repositories inside ``transaction()`` is
    committed together when the block exits normally and rolled back
    entirely when it raises (including cancellation).
    """

    @abstractmethod
    def transaction(self) -> AbstractAsyncContextManager[None]:
        """Open an atomic transaction scope."""
        pass
