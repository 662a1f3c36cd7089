"""Repository interfaces for the identity domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from unid.domain.repository.binding import BindingRepository
from unid.domain.repository.cascade import CascadeRepository
from unid.domain.repository.identity import IdentityRepository
from unid.domain.repository.unit_of_work import UnitOfWork

__all__ = [
    "BindingRepository",
    "CascadeRepository",
    "IdentityRepository",
    "UnitOfWork",
]
