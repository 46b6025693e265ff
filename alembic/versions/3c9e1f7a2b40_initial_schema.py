"""initial_schema

Revision ID: 3c9e1f7a2b40
Revises:
Create Date: 2026-10-19 00:00:00.000000

Creates the ``users`` and ``market_prices`` tables and their three
PostgreSQL enum types.  Requires the uuid-ossp extension for
``uuid_generate_v4()``.
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "3c9e1f7a2b40"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

# ── Enum type names (PostgreSQL CREATE TYPE) ────────────────────────────────
ENUM_USER_ROLE = postgresql.ENUM(
    "farmer", "extension_officer", "buyer", name="user_role", create_type=False
)
ENUM_CROP_TYPE = postgresql.ENUM(
    "tea", "coffee", "bananas", "avocados", name="crop_type", create_type=False
)
ENUM_PRICE_QUALITY = postgresql.ENUM(
    "premium", "standard", "low", name="price_quality", create_type=False
)


def upgrade() -> None:
    op.execute('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"')

    # ── 1. Create enum types ────────────────────────────────────────────
    ENUM_USER_ROLE.create(op.get_bind(), checkfirst=True)
    ENUM_CROP_TYPE.create(op.get_bind(), checkfirst=True)
    ENUM_PRICE_QUALITY.create(op.get_bind(), checkfirst=True)

    # ── 2. Auth tables ──────────────────────────────────────────────────
    op.create_table(
        "users",
        sa.Column(
            "id",
            postgresql.UUID(as_uuid=True),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(320), nullable=False),
        sa.Column("hashed_password", sa.String(128), nullable=False),
        sa.Column(
            "role",
            ENUM_USER_ROLE,
            server_default="farmer",
            nullable=False,
        ),
        sa.Column(
            "crops",
            postgresql.ARRAY(sa.String(32)),
            server_default=sa.text("'{}'"),
            nullable=False,
        ),
        sa.Column(
            "is_active",
            sa.Boolean(),
            server_default=sa.text("true"),
            nullable=False,
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    # ── 3. Market tables ────────────────────────────────────────────────
    op.create_table(
        "market_prices",
        sa.Column("id", sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column("crop", ENUM_CROP_TYPE, nullable=False),
        sa.Column("price_per_kg", sa.Float(), nullable=False),
        sa.Column("unit", sa.String(32), server_default="KES/kg", nullable=False),
        sa.Column("market", sa.String(255), server_default="Kisii County", nullable=False),
        sa.Column(
            "quality",
            ENUM_PRICE_QUALITY,
            server_default="standard",
            nullable=False,
        ),
        sa.Column("updated_by_id", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column(
            "date",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "ingested_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.CheckConstraint("price_per_kg > 0", name="ck_market_prices_price_positive"),
        sa.ForeignKeyConstraint(["updated_by_id"], ["users.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_market_prices_crop_date", "market_prices", ["crop", "date"])


def downgrade() -> None:
    op.drop_index("ix_market_prices_crop_date", table_name="market_prices")
    op.drop_table("market_prices")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")

    ENUM_PRICE_QUALITY.drop(op.get_bind(), checkfirst=True)
    ENUM_CROP_TYPE.drop(op.get_bind(), checkfirst=True)
    ENUM_USER_ROLE.drop(op.get_bind(), checkfirst=True)
