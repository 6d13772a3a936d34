"""create_content_tables

Revision ID: 0001
Revises:
Create Date: 2026-10-19 09:12:40.318204

"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "0001"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Create collections and entries tables."""
    op.create_table(
        "collections",
        sa.Column("id", sa.String(length=36), nullable=False, comment="Collection ID"),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column(
            "fields",
            sa.Text(),
            nullable=False,
            comment="JSON list of field definitions",
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("(CURRENT_TIMESTAMP)"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("(CURRENT_TIMESTAMP)"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_collections_name", "collections", ["name"], unique=True)

    op.create_table(
        "entries",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("collection_id", sa.String(length=36), nullable=False),
        sa.Column("slug", sa.String(length=255), nullable=False),
        sa.Column("data", sa.Text(), nullable=False),
        sa.Column("status", sa.String(length=16), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["collection_id"], ["collections.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("collection_id", "slug", name="uq_entries_collection_slug"),
    )
    op.create_index("ix_entries_collection_id", "entries", ["collection_id"])
    op.create_index("ix_entries_status", "entries", ["status"])
    op.create_index("ix_entries_collection_position", "entries", ["collection_id", "position"])


def downgrade() -> None:
    """Drop entries and collections tables."""
    op.drop_index("ix_entries_collection_position", table_name="entries")
    op.drop_index("ix_entries_status", table_name="entries")
    op.drop_index("ix_entries_collection_id", table_name="entries")
    op.drop_table("entries")
    op.drop_index("ix_collections_name", table_name="collections")
    op.drop_table("collections")
