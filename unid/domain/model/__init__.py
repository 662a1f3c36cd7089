"""Domain model entities for unified identities."""

from unid.domain.model.binding import Binding
from unid.domain.model.cascade import CascadePlan, CascadeStep
from unid.domain.model.identity import Identity
from unid.domain.model.merge import MergeAuthorization, MergeResult

__all__ = [
    "Identity",
    "Binding",
    "MergeResult",
    "MergeAuthorization",
    "CascadeStep",
    "CascadePlan",
]
