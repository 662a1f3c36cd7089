"""Domain value objects for unified identities."""

from unid.domain.value.identifiers import BindingId, UniversalId
from unid.domain.value.types import (
    AuthMethod,
    AuthType,
    IdentityClaim,
    IdentityKey,
    QualifiedName,
    VerifiedAccount,
)

__all__ = [
    # Identifiers
    "UniversalId",
    "BindingId",
    # Types
    "AuthType",
    "AuthMethod",
    "QualifiedName",
    "IdentityClaim",
    "IdentityKey",
    "VerifiedAccount",
]
