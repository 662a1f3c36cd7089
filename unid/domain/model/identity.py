"""Identity aggregate root.

An identity is the durable account behind every authentication method a
person has bound to it.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field

from unid.domain.model.common import DomainModel
from unid.domain.value import IdentityKey, QualifiedName, UniversalId


class Identity(DomainModel):
    """Unified identity - method-agnostic account.

    Addressed by a universal id that never changes, no matter which
    methods are bound or unbound. ``owner``/``name`` is the account name
    inside its organization; dependent records in other domains refer to
    the identity by it.
    """

    universal_id: UniversalId
    owner: str
    name: str
    display_name: Optional[str] = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def qualified_name(self) -> QualifiedName:
        return QualifiedName.of(self.owner, self.name)

    def key_value(self, key: IdentityKey) -> str:
        """Value of the attribute dependent records use to reference us.

        Args:
            key: Which identity attribute is referenced

        Returns:
            The attribute value as stored in dependent tables
        """
        if key is IdentityKey.UNIVERSAL_ID:
            return str(self.universal_id)
        if key is IdentityKey.NAME:
            return self.name
        if key is IdentityKey.OWNER:
            return self.owner
        return self.qualified_name.root
