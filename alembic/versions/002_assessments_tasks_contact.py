"""Assessments, question bank, programming tasks, task progress, contact messages.

Revision ID: 002
Revises: 001
Create Date: 2025-10-08

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "assessments",
        sa.Column("id", sa.String(32), nullable=False),
        sa.Column("user_id", sa.String(191), nullable=False),
        sa.Column("type", sa.String(8), nullable=False),
        sa.Column("language", sa.String(32), nullable=True),
        sa.Column("score", sa.Integer(), nullable=True),
        sa.Column("total_questions", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("confidence", sa.Integer(), nullable=False),
        sa.Column("answers", sa.JSON(), nullable=False),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_assessments_user_id_type", "assessments", ["user_id", "type"])

    op.create_table(
        "assessment_questions",
        sa.Column("id", sa.String(32), nullable=False),
        sa.Column("question", sa.Text(), nullable=False),
        sa.Column("type", sa.String(32), nullable=False),
        sa.Column("options", sa.JSON(), nullable=True),
        sa.Column("correct_answer", sa.Text(), nullable=False),
        sa.Column("category", sa.String(32), nullable=False),
        sa.Column("difficulty", sa.String(16), nullable=False),
        sa.Column("language", sa.String(32), nullable=True),
        sa.Column("explanation", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_assessment_questions_category"), "assessment_questions", ["category"])
    op.create_index(
        "ix_assessment_questions_difficulty_language", "assessment_questions", ["difficulty", "language"]
    )

    op.create_table(
        "programming_tasks",
        sa.Column("id", sa.String(32), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("language", sa.String(32), nullable=False),
        sa.Column("difficulty", sa.String(16), nullable=False),
        sa.Column("category", sa.String(32), nullable=False),
        sa.Column("starter_code", sa.Text(), nullable=True),
        sa.Column("hints", sa.JSON(), nullable=False),
        sa.Column("solution", sa.Text(), nullable=True),
        sa.Column("test_cases", sa.JSON(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_programming_tasks_category"), "programming_tasks", ["category"])
    op.create_index("ix_programming_tasks_language_difficulty", "programming_tasks", ["language", "difficulty"])

    op.create_table(
        "user_task_progress",
        sa.Column("id", sa.String(32), nullable=False),
        sa.Column("user_id", sa.String(191), nullable=False),
        sa.Column("task_id", sa.String(32), nullable=False),
        sa.Column("status", sa.String(16), nullable=False, server_default="not_started"),
        sa.Column("attempts", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("chat_session_id", sa.String(32), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["task_id"], ["programming_tasks.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "task_id", name="uq_user_task_progress_user_task"),
    )
    op.create_index("ix_user_task_progress_user_id_status", "user_task_progress", ["user_id", "status"])

    op.create_table(
        "contact_messages",
        sa.Column("id", sa.String(32), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("subject", sa.String(255), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("status", sa.String(16), nullable=False, server_default="pending"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_contact_messages_status_created_at", "contact_messages", ["status", "created_at"])


def downgrade() -> None:
    op.drop_index("ix_contact_messages_status_created_at", table_name="contact_messages")
    op.drop_table("contact_messages")
    op.drop_index("ix_user_task_progress_user_id_status", table_name="user_task_progress")
    op.drop_table("user_task_progress")
    op.drop_index("ix_programming_tasks_language_difficulty", table_name="programming_tasks")
    op.drop_index(op.f("ix_programming_tasks_category"), table_name="programming_tasks")
    op.drop_table("programming_tasks")
    op.drop_index("ix_assessment_questions_difficulty_language", table_name="assessment_questions")
    op.drop_index(op.f("ix_assessment_questions_category"), table_name="assessment_questions")
    op.drop_table("assessment_questions")
    op.drop_index("ix_assessments_user_id_type", table_name="assessments")
    op.drop_table("assessments")
