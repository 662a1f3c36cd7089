"""Identity binding entity.

Associates one authentication method with one identity.
"""

from datetime import datetime, timezone

from pydantic import Field

from unid.domain.model.common import DomainModel
from unid.domain.value import AuthMethod, AuthType, BindingId, UniversalId


class Binding(DomainModel):
    """Authentication method bound to an identity.

    ``(auth_type, auth_value)`` is globally unique: no two identities may
    claim the same method. An identity can hold several bindings but
    never fewer than one.
    """

    id: BindingId
    universal_id: UniversalId
    auth_type: AuthType
    auth_value: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def method(self) -> AuthMethod:
        return AuthMethod(auth_type=self.auth_type, auth_value=self.auth_value)
