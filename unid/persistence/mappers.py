"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict
from uuid import UUID

from unid.domain.model import Binding, Identity
from unid.domain.value import AuthType, BindingId, UniversalId


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def row_to_identity(row: Dict[str, Any]) -> Identity:
    """Convert database row to Identity domain model.

    Args:
        row: Database row as dict

    Returns:
        Identity domain model
    """
    return Identity(
        universal_id=UniversalId(_uuid(row["universal_id"])),
        owner=row["owner"],
        name=row["name"],
        display_name=row.get("display_name"),
        created_at=row["created_at"],
    )


def identity_to_dict(identity: Identity) -> Dict[str, Any]:
    """Convert Identity domain model to database dict."""
    return identity.model_dump()


def row_to_binding(row: Dict[str, Any]) -> Binding:
    """Convert database row to Binding domain model.

    Args:
        row: Database row as dict

    Returns:
        Binding domain model
    """
    return Binding(
        id=BindingId(_uuid(row["id"])),
        universal_id=UniversalId(_uuid(row["universal_id"])),
        auth_type=AuthType(row["auth_type"]),
        auth_value=row["auth_value"],
        created_at=row["created_at"],
    )


def binding_to_dict(binding: Binding) -> Dict[str, Any]:
    """Convert Binding domain model to database dict.

    Args:
        binding: Binding domain model

    Returns:
        Dict suitable for database insertion
    """
    data = binding.model_dump()
    data["auth_type"] = binding.auth_type.value
    return data
