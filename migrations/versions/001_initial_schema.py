"""Initial schema for BrainBurst assignment progress

Revision ID: 001_initial
Revises:
Create Date: 2026-10-12

"""

import typing as t

from alembic import op
from sqlalchemy import false, func as f, text, true
from sqlalchemy.schema import Column, ForeignKey, PrimaryKeyConstraint
from sqlalchemy.types import Boolean, DateTime, Float, Integer, String, Text

# revision identifiers, used by Alembic.
revision: str = "001_initial"
down_revision: str | None = None
branch_labels: str | t.Sequence[str] | None = None
depends_on: str | t.Sequence[str] | None = None


def upgrade() -> None:
    # Classes
    op.create_table(
        "classes",
        Column("class_id", String(22), primary_key=True),
        Column("name", String, nullable=False),
        Column("teacher_id", String(22), nullable=False),
        Column("is_active", Boolean, server_default=true(), nullable=False),
        Column("create_time", DateTime(timezone=True), server_default=f.now(), nullable=False),
        Column("update_time", DateTime(timezone=True), server_default=f.now(), nullable=False),
    )

    op.create_table(
        "class_members",
        Column("class_id", String(22), ForeignKey("classes.class_id", ondelete="CASCADE"), nullable=False),
        Column("student_id", String(22), nullable=False),
        Column("create_time", DateTime(timezone=True), server_default=f.now(), nullable=False),
        PrimaryKeyConstraint("class_id", "student_id", name="pk_class_members"),
    )

    # Assignments
    op.create_table(
        "assignments",
        Column("assignment_id", String(22), primary_key=True),
        Column("class_id", String(22), ForeignKey("classes.class_id"), nullable=False),
        Column("test_id", String(22), nullable=False),
        Column("teacher_id", String(22), nullable=False),
        Column("title", String, nullable=False),
        Column("max_score", Float, nullable=False),
        Column("due_date", DateTime(timezone=True), nullable=True),
        Column("attempts_allowed", Integer, nullable=True),
        Column("archival_state", String(32), server_default=text("'active'"), nullable=False),
        Column("create_time", DateTime(timezone=True), server_default=f.now(), nullable=False),
        Column("update_time", DateTime(timezone=True), server_default=f.now(), nullable=False),
    )

    # Progress: one record per (assignment, student)
    op.create_table(
        "assignment_progress",
        Column("assignment_id", String(22), ForeignKey("assignments.assignment_id"), nullable=False),
        Column("student_id", String(22), nullable=False),
        Column("stored_status", String(32), server_default=text("'assigned'"), nullable=False),
        Column("attempt_count", Integer, server_default=text("0"), nullable=False),
        Column("best_score", Float, nullable=True),
        Column("started_at", DateTime(timezone=True), nullable=True),
        Column("submitted_at", DateTime(timezone=True), nullable=True),
        Column("last_attempt_at", DateTime(timezone=True), nullable=True),
        Column("teacher_comment", Text, nullable=True),
        Column("graded_at", DateTime(timezone=True), nullable=True),
        Column("excused_at", DateTime(timezone=True), nullable=True),
        Column("blocked_at", DateTime(timezone=True), nullable=True),
        Column("version", Integer, server_default=text("0"), nullable=False),
        Column("create_time", DateTime(timezone=True), server_default=f.now(), nullable=False),
        Column("update_time", DateTime(timezone=True), server_default=f.now(), nullable=False),
        PrimaryKeyConstraint("assignment_id", "student_id", name="pk_assignment_progress"),
    )

    # Results
    op.create_table(
        "standard_results",
        Column("result_id", String(22), primary_key=True),
        Column("test_id", String(22), nullable=False),
        Column("student_id", String(22), nullable=False),
        Column("score", Float, nullable=False),
        Column("total", Float, nullable=False),
        Column("assignment_id", String(22), ForeignKey("assignments.assignment_id"), nullable=True),
        Column("create_time", DateTime(timezone=True), server_default=f.now(), nullable=False),
    )

    op.create_table(
        "game_results",
        Column("result_id", String(22), primary_key=True),
        Column("test_id", String(22), nullable=False),
        Column("student_id", String(22), nullable=False),
        Column("score", Float, nullable=False),
        Column("total_questions", Integer, nullable=False),
        Column("correct_answers", Integer, nullable=False),
        Column("game_type", String, server_default=text("'memory-match'"), nullable=False),
        Column("best_streak", Integer, server_default=text("0"), nullable=False),
        Column("assignment_id", String(22), ForeignKey("assignments.assignment_id"), nullable=True),
        Column("create_time", DateTime(timezone=True), server_default=f.now(), nullable=False),
    )

    # Notifications
    op.create_table(
        "notifications",
        Column("notification_id", String(22), primary_key=True),
        Column("recipient_id", String(22), nullable=False),
        Column("title", String, nullable=False),
        Column("message", Text, nullable=False),
        Column("related_id", String, nullable=True),
        Column("is_read", Boolean, server_default=false(), nullable=False),
        Column("create_time", DateTime(timezone=True), server_default=f.now(), nullable=False),
    )

    # Indexes
    op.create_index("ix_classes_teacher_id", "classes", ["teacher_id"])
    op.create_index("ix_assignments_class_id", "assignments", ["class_id"])
    op.create_index("ix_assignment_progress_student_id", "assignment_progress", ["student_id"])
    op.create_index("ix_standard_results_assignment_id", "standard_results", ["assignment_id"])
    op.create_index("ix_game_results_assignment_id", "game_results", ["assignment_id"])
    op.create_index("ix_notifications_recipient_id", "notifications", ["recipient_id"])


def downgrade() -> None:
    # Drop indexes
    op.drop_index("ix_notifications_recipient_id")
    op.drop_index("ix_game_results_assignment_id")
    op.drop_index("ix_standard_results_assignment_id")
    op.drop_index("ix_assignment_progress_student_id")
    op.drop_index("ix_assignments_class_id")
    op.drop_index("ix_classes_teacher_id")

    # Drop tables in reverse order (respecting foreign keys)
    op.drop_table("notifications")
    op.drop_table("game_results")
    op.drop_table("standard_results")
    op.drop_table("assignment_progress")
    op.drop_table("assignments")
    op.drop_table("class_members")
    op.drop_table("classes")
