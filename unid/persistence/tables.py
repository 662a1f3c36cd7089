"""SQLAlchemy table definitions for the identity service.

They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    BigInteger,
    Column,
    ForeignKey,
    Index,
    MetaData,
    Numeric,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# IDENTITIES TABLE
# ============================================================================
identities_table = Table(
    "identities",
    metadata,
    Column("universal_id", UUID, primary_key=True),
    Column("owner", String(100), nullable=False),
    Column("name", String(100), nullable=False),
    Column("display_name", String(255), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("owner", "name", name="uq_identity_owner_name"),
)

# ============================================================================
# IDENTITY BINDINGS TABLE
# ============================================================================
identity_bindings_table = Table(
    "identity_bindings",
    metadata,
    Column("id", UUID, primary_key=True),
    Column(
        "universal_id",
        UUID,
        ForeignKey("identities.universal_id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("auth_type", String(50), nullable=False),
    Column("auth_value", String(255), nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    # Authoritative guard against two identities claiming one method
    UniqueConstraint("auth_type", "auth_value", name="uq_identity_binding_method"),
)

Index("idx_identity_bindings_universal_id", identity_bindings_table.c.universal_id)

# ============================================================================
# DEPENDENT DOMAINS (cleared for an identity that is merged away)
# ============================================================================
tokens_table = Table(
    "tokens",
    metadata,
    Column("id", UUID, primary_key=True),
    Column("user", String(100), nullable=False),
    Column("access_token", Text, nullable=False),
    Column("expires_at", TIMESTAMP(timezone=True), nullable=True),
)

Index("idx_tokens_user", tokens_table.c.user)

sessions_table = Table(
    "sessions",
    metadata,
    Column("id", UUID, primary_key=True),
    Column("owner", String(100), nullable=False),
    Column("name", String(100), nullable=False),
    Column("session_key", String(255), nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_sessions_owner_name", sessions_table.c.owner, sessions_table.c.name)

verification_records_table = Table(
    "verification_records",
    metadata,
    Column("id", UUID, primary_key=True),
    Column("user", String(201), nullable=False),  # owner/name
    Column("receiver", String(255), nullable=False),
    Column("code", String(20), nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_verification_records_user", verification_records_table.c.user)

resources_table = Table(
    "resources",
    metadata,
    Column("id", UUID, primary_key=True),
    Column("user", String(100), nullable=False),
    Column("file_path", Text, nullable=False),
    Column("file_size", BigInteger, nullable=False, server_default="0"),
)

Index("idx_resources_user", resources_table.c.user)

payments_table = Table(
    "payments",
    metadata,
    Column("id", UUID, primary_key=True),
    Column("user", String(100), nullable=False),
    Column("amount", Numeric(12, 2), nullable=False),
    Column("state", String(50), nullable=False),
)

Index("idx_payments_user", payments_table.c.user)

transactions_table = Table(
    "transactions",
    metadata,
    Column("id", UUID, primary_key=True),
    Column("user", String(100), nullable=False),
    Column("amount", Numeric(12, 2), nullable=False),
    Column("category", String(50), nullable=False),
)

Index("idx_transactions_user", transactions_table.c.user)

subscriptions_table = Table(
    "subscriptions",
    metadata,
    Column("id", UUID, primary_key=True),
    Column("user", String(100), nullable=False),
    Column("plan", String(100), nullable=False),
    Column("state", String(50), nullable=False),
)

Index("idx_subscriptions_user", subscriptions_table.c.user)

# ============================================================================
# AUDIT RECORDS (retained after a merge, never cascaded)
# ============================================================================
audit_records_table = Table(
    "audit_records",
    metadata,
    Column("id", UUID, primary_key=True),
    Column("user", String(100), nullable=False),
    Column("action", String(100), nullable=False),
    Column("detail", Text, nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_audit_records_user", audit_records_table.c.user)
