"""Create tweets table

Revision ID: 002
Revises: 001
Create Date: 2025-11-16 08:36:48.000000+00:00

What:  Creates the `tweets` table: one row per posted tweet.
How:   UUID primary key (generated by the application), user_id foreign key
       with ON DELETE CASCADE, composite index on (user_id, posted_at).

Rollback: downgrade() drops the index and the table; all tweets are lost.
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers
revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "tweets",
        sa.Column("id", sa.Uuid(as_uuid=True), nullable=False),
        sa.Column(
            "user_id",
            sa.BigInteger().with_variant(sa.Integer(), "sqlite"),
            nullable=False,
        ),
        sa.Column("body", sa.Text(), nullable=False),
        # Logical post time, written by the application at insert
        sa.Column("posted_at", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(
            ["user_id"],
            ["users.id"],
            name="tweets_user_id_foreign",
            ondelete="CASCADE",
        ),
    )

    # Per-user timelines: WHERE user_id = :id ORDER BY posted_at
    op.create_index(
        "tweets_user_id_posted_at_index",
        "tweets",
        ["user_id", "posted_at"],
    )


def downgrade() -> None:
    op.drop_index("tweets_user_id_posted_at_index", table_name="tweets")
    op.drop_table("tweets")
