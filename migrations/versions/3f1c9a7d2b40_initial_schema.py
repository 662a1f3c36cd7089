"""initial_schema

Create the schema of the identity service:
- Identities (universal id plus owner/name account)
- Identity bindings (one row per bound login method, unique per method)
- Dependent records cleared when an identity is merged away
- Audit records, which outlive merges

Revision ID: 3f1c9a7d2b40
Revises:
Create Date: 2026-10-19 09:12:04.518230

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "3f1c9a7d2b40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _id_column() -> sa.Column:
    return sa.Column(
        "id",
        sa.UUID(),
        server_default=sa.text("uuid_generate_v4()"),
        nullable=False,
    )


def _created_at_column() -> sa.Column:
    return sa.Column(
        "created_at",
        sa.TIMESTAMP(timezone=True),
        nullable=False,
        server_default=sa.text("NOW()"),
    )


def upgrade() -> None:
    """Upgrade schema."""
    op.execute('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"')

    # ========================================================================
    # IDENTITIES table
    # ========================================================================
    op.create_table(
        "identities",
        sa.Column("universal_id", sa.UUID(), nullable=False),
        sa.Column("owner", sa.String(100), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("display_name", sa.String(255), nullable=True),
        _created_at_column(),
        sa.PrimaryKeyConstraint("universal_id"),
        sa.UniqueConstraint("owner", "name", name="uq_identity_owner_name"),
    )

    # ========================================================================
    # IDENTITY_BINDINGS table
    # ========================================================================
    op.create_table(
        "identity_bindings",
        _id_column(),
        sa.Column("universal_id", sa.UUID(), nullable=False),
        sa.Column("auth_type", sa.String(50), nullable=False),  # 'email', 'github'
        sa.Column("auth_value", sa.String(255), nullable=False),
        _created_at_column(),
        sa.ForeignKeyConstraint(
            ["universal_id"], ["identities.universal_id"], ondelete="CASCADE"
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "auth_type", "auth_value", name="uq_identity_binding_method"
        ),
    )
    op.create_index(
        "idx_identity_bindings_universal_id", "identity_bindings", ["universal_id"]
    )

    # ========================================================================
    # DEPENDENT tables (cleared during a merge)
    # ========================================================================
    op.create_table(
        "tokens",
        _id_column(),
        sa.Column("user", sa.String(100), nullable=False),
        sa.Column("access_token", sa.Text(), nullable=False),
        sa.Column("expires_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_tokens_user", "tokens", ["user"])

    op.create_table(
        "sessions",
        _id_column(),
        sa.Column("owner", sa.String(100), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("session_key", sa.String(255), nullable=False),
        _created_at_column(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_sessions_owner_name", "sessions", ["owner", "name"])

    op.create_table(
        "verification_records",
        _id_column(),
        sa.Column("user", sa.String(201), nullable=False),  # owner/name
        sa.Column("receiver", sa.String(255), nullable=False),
        sa.Column("code", sa.String(20), nullable=False),
        _created_at_column(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "idx_verification_records_user", "verification_records", ["user"]
    )

    op.create_table(
        "resources",
        _id_column(),
        sa.Column("user", sa.String(100), nullable=False),
        sa.Column("file_path", sa.Text(), nullable=False),
        sa.Column("file_size", sa.BigInteger(), nullable=False, server_default="0"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_resources_user", "resources", ["user"])

    op.create_table(
        "payments",
        _id_column(),
        sa.Column("user", sa.String(100), nullable=False),
        sa.Column("amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("state", sa.String(50), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_payments_user", "payments", ["user"])

    op.create_table(
        "transactions",
        _id_column(),
        sa.Column("user", sa.String(100), nullable=False),
        sa.Column("amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("category", sa.String(50), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_transactions_user", "transactions", ["user"])

    op.create_table(
        "subscriptions",
        _id_column(),
        sa.Column("user", sa.String(100), nullable=False),
        sa.Column("plan", sa.String(100), nullable=False),
        sa.Column("state", sa.String(50), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_subscriptions_user", "subscriptions", ["user"])

    # ========================================================================
    # AUDIT_RECORDS table (kept after a merge)
    # ========================================================================
    op.create_table(
        "audit_records",
        _id_column(),
        sa.Column("user", sa.String(100), nullable=False),
        sa.Column("action", sa.String(100), nullable=False),
        sa.Column("detail", sa.Text(), nullable=True),
        _created_at_column(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_audit_records_user", "audit_records", ["user"])


def downgrade() -> None:
    """Downgrade schema."""
    for table in (
        "audit_records",
        "subscriptions",
        "transactions",
        "payments",
        "resources",
        "verification_records",
        "sessions",
        "tokens",
        "identity_bindings",
        "identities",
    ):
        op.drop_table(table)
