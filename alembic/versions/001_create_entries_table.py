"""Create entries table

Revision ID: 001
Revises: None
Create Date: 2024-09-09 00:00:00.000000+00:00

What:  Creates the `entries` table holding journal entries.
How:   Portable column types (Uuid, DateTime with time zone) so the same
       revision runs on PostgreSQL and SQLite.

Rollback: downgrade() drops the table entirely (all entries are lost).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the entries table and the title lookup index."""
    op.create_table(
        "entries",
        sa.Column("id", sa.Uuid(), nullable=False, comment="Opaque entry identifier"),
        sa.Column(
            "title",
            sa.String(50),
            nullable=False,
            comment="Entry title, matched exactly by the title lookup",
        ),
        sa.Column("body", sa.Text(), nullable=False, comment="Entry content"),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            comment="When this entry was created (UTC), immutable",
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            comment="When this entry was last updated (UTC)",
        ),
        sa.PrimaryKeyConstraint("id"),
    )

    # GET /entry/title/{title} filters on equality
    op.create_index("ix_entries_title", "entries", ["title"])


def downgrade() -> None:
    op.drop_index("ix_entries_title", table_name="entries")
    op.drop_table("entries")
