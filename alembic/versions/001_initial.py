"""Initial tables: users, chat_sessions, messages, stats, language_progress.

Revision ID: 001
Revises:
Create Date: 2025-10-01

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.String(191), nullable=False),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("role", sa.String(16), nullable=False, server_default="user"),
        sa.Column("is_blocked", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("experience", sa.String(32), nullable=True),
        sa.Column("focus_areas", sa.JSON(), nullable=False),
        sa.Column("confidence", sa.Integer(), nullable=True),
        sa.Column("ai_experience", sa.String(32), nullable=True),
        sa.Column("preferred_languages", sa.JSON(), nullable=False),
        sa.Column("primary_language", sa.String(32), nullable=True),
        sa.Column("profile_completed", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("pre_assessment_completed", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("tour_completed", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_users_email"), "users", ["email"])

    op.create_table(
        "chat_sessions",
        sa.Column("id", sa.String(32), nullable=False),
        sa.Column("user_id", sa.String(191), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_chat_sessions_user_id_updated_at", "chat_sessions", ["user_id", "updated_at"])

    op.create_table(
        "messages",
        sa.Column("id", sa.String(32), nullable=False),
        sa.Column("user_id", sa.String(191), nullable=False),
        sa.Column("chat_session_id", sa.String(32), nullable=True),
        sa.Column("role", sa.String(16), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("question_type", sa.String(64), nullable=True),
        sa.Column("timestamp", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["chat_session_id"], ["chat_sessions.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_messages_role"), "messages", ["role"])
    op.create_index(op.f("ix_messages_question_type"), "messages", ["question_type"])
    op.create_index("ix_messages_user_id_timestamp", "messages", ["user_id", "timestamp"])
    op.create_index("ix_messages_chat_session_id_timestamp", "messages", ["chat_session_id", "timestamp"])

    op.create_table(
        "stats",
        sa.Column("id", sa.String(32), nullable=False),
        sa.Column("user_id", sa.String(191), nullable=False),
        sa.Column("questions_asked", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("avg_response_time", sa.Float(), nullable=False, server_default="0"),
        sa.Column("most_frequent_response_type", sa.String(64), nullable=True),
        sa.Column("tasks_completed", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("total_time_spent", sa.Integer(), nullable=False, server_default="0"),
        *_timestamps(),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id"),
    )

    op.create_table(
        "language_progress",
        sa.Column("id", sa.String(32), nullable=False),
        sa.Column("user_id", sa.String(191), nullable=False),
        sa.Column("language", sa.String(32), nullable=False),
        sa.Column("questions_asked", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("tasks_completed", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("last_used_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "language", name="uq_language_progress_user_language"),
    )
    op.create_index(op.f("ix_language_progress_user_id"), "language_progress", ["user_id"])


def downgrade() -> None:
    op.drop_index(op.f("ix_language_progress_user_id"), table_name="language_progress")
    op.drop_table("language_progress")
    op.drop_table("stats")
    op.drop_index("ix_messages_chat_session_id_timestamp", table_name="messages")
    op.drop_index("ix_messages_user_id_timestamp", table_name="messages")
    op.drop_index(op.f("ix_messages_question_type"), table_name="messages")
    op.drop_index(op.f("ix_messages_role"), table_name="messages")
    op.drop_table("messages")
    op.drop_index("ix_chat_sessions_user_id_updated_at", table_name="chat_sessions")
    op.drop_table("chat_sessions")
    op.drop_index(op.f("ix_users_email"), table_name="users")
    op.drop_table("users")
