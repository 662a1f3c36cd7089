"""Merge value objects."""

from unid.domain.model.common import DomainModel
from unid.domain.value import AuthMethod, UniversalId


class MergeResult(DomainModel):
    """Summary of a completed merge.

    ``transferred_methods`` lists only the methods that moved to the
    surviving identity. Methods the survivor already owned are dropped
    without being reported.
    """

    universal_id: UniversalId
    deleted_universal_id: UniversalId
    transferred_methods: list[AuthMethod]


class MergeAuthorization(DomainModel):
    """Decision of the merge authorization check."""

    allowed: bool
    reason: str
