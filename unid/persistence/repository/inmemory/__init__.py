"""In-memory repository implementations for testing."""

from .binding import InMemoryBindingRepository
from .cascade import InMemoryCascadeRepository
from .identity import InMemoryIdentityRepository
from .store import InMemoryStore
from .unit_of_work import InMemoryUnitOfWork

__all__ = [
    "InMemoryBindingRepository",
    "InMemoryCascadeRepository",
    "InMemoryIdentityRepository",
    "InMemoryStore",
    "InMemoryUnitOfWork",
]
