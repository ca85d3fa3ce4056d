"""create chat tables

Revision ID: 3f1c2a9d7b10
Revises:
Create Date: 2025-10-30 09:12:41.518204

"""
from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "3f1c2a9d7b10"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the message log, counter, range and session tables."""
    op.create_table(
        "message",
        sa.Column("message_no", sa.BigInteger(), autoincrement=False, nullable=False),
        sa.Column("user_id", sa.Text(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("created_at", sa.BigInteger(), nullable=False),
        sa.PrimaryKeyConstraint("message_no"),
    )
    op.create_index("ix_message_created_at", "message", ["created_at", "message_no"])

    op.create_table(
        "message_counter",
        sa.Column("counter_id", sa.Text(), nullable=False),
        sa.Column("count", sa.BigInteger(), nullable=False),
        sa.PrimaryKeyConstraint("counter_id"),
    )

    op.create_table(
        "message_range",
        sa.Column("record_id", sa.Text(), nullable=False),
        sa.Column("start", sa.BigInteger(), nullable=False),
        sa.Column("end", sa.BigInteger(), nullable=False),
        sa.Column("message_count", sa.Integer(), nullable=False),
        sa.Column("user_count", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.BigInteger(), nullable=False),
        sa.Column("expires_at", sa.BigInteger(), nullable=False),
        sa.PrimaryKeyConstraint("record_id"),
    )
    op.create_index("ix_message_range_expires_at", "message_range", ["expires_at"])

    op.create_table(
        "chat_session",
        sa.Column("session_id", sa.Text(), nullable=False),
        sa.Column("expires_at", sa.BigInteger(), nullable=False),
        sa.PrimaryKeyConstraint("session_id"),
    )


def downgrade() -> None:
    """Drop all chat tables."""
    op.drop_table("chat_session")
    op.drop_index("ix_message_range_expires_at", table_name="message_range")
    op.drop_table("message_range")
    op.drop_table("message_counter")
    op.drop_index("ix_message_created_at", table_name="message")
    op.drop_table("message")
