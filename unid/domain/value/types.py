"""Domain value objects for unified identities.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules for authentication methods and claims.
"""

from enum import Enum

from pydantic import field_validator

from unid.domain.value.common import RootValueObject, ValueObject
from unid.domain.value.identifiers import UniversalId


class AuthType(str, Enum):
    """Supported authentication method types."""

    PASSWORD = "password"
    PHONE = "phone"
    EMAIL = "email"
    GITHUB = "github"
    GOOGLE = "google"
    WECHAT = "wechat"
    QQ = "qq"
    FACEBOOK = "facebook"
    DINGTALK = "dingtalk"
    WEIBO = "weibo"
    LDAP = "ldap"
    CUSTOM = "custom"

    @property
    def requires_credential(self) -> bool:
        """Whether logging in with this method needs a secret."""
        return self is AuthType.PASSWORD


class QualifiedName(RootValueObject[str]):
    """Account name qualified by its owning organization.

    Format: ``owner/name``. This is the canonical value of a password
    binding and the key some dependent records use for their user column.
    """

    @field_validator("root")
    @classmethod
    def validate_format(cls, v: str) -> str:
        """Validate the value has exactly one separator and two non-empty parts."""
        parts = v.split("/")
        if len(parts) != 2 or not parts[0] or not parts[1]:
            raise ValueError("Qualified name must have the form owner/name")
        return v

    @classmethod
    def of(cls, owner: str, name: str) -> "QualifiedName":
        """Build a qualified name from its parts."""
        return cls(f"{owner}/{name}")

    @property
    def owner(self) -> str:
        return self.root.split("/")[0]

    @property
    def name(self) -> str:
        return self.root.split("/")[1]


class AuthMethod(ValueObject):
    """One authentication method: a type plus the value that identifies a user.

    Examples: ``email:alice@example.com``, ``github:alice``,
    ``password:acme/alice``.
    """

    auth_type: AuthType
    auth_value: str

    @field_validator("auth_value")
    @classmethod
    def validate_auth_value(cls, v: str) -> str:
        """Validate value is not blank and fits the storage column."""
        v = v.strip()
        if len(v) < 1 or len(v) > 255:
            raise ValueError("Auth value must be 1-255 characters")
        return v

    @classmethod
    def for_password(cls, owner: str, name: str) -> "AuthMethod":
        """Build the canonical password method for an account."""
        return cls(
            auth_type=AuthType.PASSWORD,
            auth_value=QualifiedName.of(owner, name).root,
        )

    def __str__(self) -> str:
        return f"{self.auth_type.value}:{self.auth_value}"


class IdentityClaim(ValueObject):
    """Verified content of a bearer token.

    Produced only by token verification; holding one means the token was
    valid when it was checked, not that the identity still exists.
    """

    universal_id: UniversalId
    owner: str
    name: str


class VerifiedAccount(ValueObject):
    """Account whose credential was accepted by the credential service."""

    owner: str
    name: str

    @property
    def qualified_name(self) -> QualifiedName:
        return QualifiedName.of(self.owner, self.name)


class IdentityKey(str, Enum):
    """Identity attribute a dependent record uses to reference its owner."""

    UNIVERSAL_ID = "universal_id"
    NAME = "name"
    OWNER = "owner"
    QUALIFIED_NAME = "qualified_name"
