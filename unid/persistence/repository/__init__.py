"""PostgreSQL repository implementations."""

from unid.persistence.repository.binding import PostgresBindingRepository
from unid.persistence.repository.cascade import PostgresCascadeRepository
from unid.persistence.repository.identity import PostgresIdentityRepository
from unid.persistence.repository.unit_of_work import PostgresUnitOfWork

__all__ = [
    "PostgresBindingRepository",
    "PostgresCascadeRepository",
    "PostgresIdentityRepository",
    "PostgresUnitOfWork",
]
