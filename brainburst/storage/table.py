import datetime
import enum

from sqlalchemy import ForeignKey, func, Index, MetaData
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, MappedAsDataclass
from sqlalchemy.types import Text

from brainburst.model import ArchivalState, AssignmentID, ClassID, GameResultID, NotificationID, ProgressStatus, \
    StandardResultID, TestID, UserID

from .type import ShortUUIDKeyType, UTCDateTime, ValueEnum

metadata = MetaData(
    naming_convention={
        "ix": "ix_%(column_0_label)s",
        "uq": "uq_%(table_name)s_%(column_0_name)s",
        "ck": "ck_%(table_name)s_%(constraint_name)s",
        "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
        "pk": "pk_%(table_name)s",
    }
)


class base(MappedAsDataclass, DeclarativeBase):
    metadata = metadata
    type_annotation_map = {
        UserID: ShortUUIDKeyType(UserID),
        ClassID: ShortUUIDKeyType(ClassID),
        TestID: ShortUUIDKeyType(TestID),
        AssignmentID: ShortUUIDKeyType(AssignmentID),
        StandardResultID: ShortUUIDKeyType(StandardResultID),
        GameResultID: ShortUUIDKeyType(GameResultID),
        NotificationID: ShortUUIDKeyType(NotificationID),
        datetime.datetime: UTCDateTime(),
        enum.Enum: ValueEnum,
    }


# Classes


class classes(base):
    __tablename__ = "classes"

    class_id: Mapped[ClassID] = mapped_column(primary_key=True)
    name: Mapped[str]
    teacher_id: Mapped[UserID] = mapped_column(index=True)
    is_active: Mapped[bool] = mapped_column(default=True)
    create_time: Mapped[datetime.datetime] = mapped_column(default=None, server_default=func.now())
    update_time: Mapped[datetime.datetime] = mapped_column(default=None, server_default=func.now(), onupdate=func.now())


class class_members(base):
    __tablename__ = "class_members"

    class_id: Mapped[ClassID] = mapped_column(ForeignKey("classes.class_id", ondelete="CASCADE"), primary_key=True)
    student_id: Mapped[UserID] = mapped_column(primary_key=True)
    create_time: Mapped[datetime.datetime] = mapped_column(default=None, server_default=func.now())


# Assignments & Progress


class assignments(base):
    __tablename__ = "assignments"

    assignment_id: Mapped[AssignmentID] = mapped_column(primary_key=True)
    class_id: Mapped[ClassID] = mapped_column(ForeignKey("classes.class_id"), index=True)
    test_id: Mapped[TestID]
    teacher_id: Mapped[UserID]
    title: Mapped[str]
    max_score: Mapped[float]
    due_date: Mapped[datetime.datetime | None] = mapped_column(default=None)
    attempts_allowed: Mapped[int | None] = mapped_column(default=None)
    archival_state: Mapped[ArchivalState] = mapped_column(default=ArchivalState.Active)
    create_time: Mapped[datetime.datetime] = mapped_column(default=None, server_default=func.now())
    update_time: Mapped[datetime.datetime] = mapped_column(default=None, server_default=func.now(), onupdate=func.now())


class assignment_progress(base):
    __tablename__ = "assignment_progress"

    # the composite key is the one-record-per-student guarantee
    assignment_id: Mapped[AssignmentID] = mapped_column(ForeignKey("assignments.assignment_id"), primary_key=True)
    student_id: Mapped[UserID] = mapped_column(primary_key=True)
    stored_status: Mapped[ProgressStatus] = mapped_column(default=ProgressStatus.Assigned)
    attempt_count: Mapped[int] = mapped_column(default=0)
    best_score: Mapped[float | None] = mapped_column(default=None)
    started_at: Mapped[datetime.datetime | None] = mapped_column(default=None)
    submitted_at: Mapped[datetime.datetime | None] = mapped_column(default=None)
    last_attempt_at: Mapped[datetime.datetime | None] = mapped_column(default=None)
    teacher_comment: Mapped[str | None] = mapped_column(Text, default=None)
    graded_at: Mapped[datetime.datetime | None] = mapped_column(default=None)
    excused_at: Mapped[datetime.datetime | None] = mapped_column(default=None)
    blocked_at: Mapped[datetime.datetime | None] = mapped_column(default=None)
    version: Mapped[int] = mapped_column(default=0)
    create_time: Mapped[datetime.datetime] = mapped_column(default=None, server_default=func.now())
    update_time: Mapped[datetime.datetime] = mapped_column(default=None, server_default=func.now(), onupdate=func.now())

    __table_args__ = (Index("ix_assignment_progress_student_id", "student_id"),)


# Results


class standard_results(base):
    __tablename__ = "standard_results"

    result_id: Mapped[StandardResultID] = mapped_column(primary_key=True)
    test_id: Mapped[TestID]
    student_id: Mapped[UserID]
    score: Mapped[float]
    total: Mapped[float]
    assignment_id: Mapped[AssignmentID | None] = mapped_column(
        ForeignKey("assignments.assignment_id"), default=None, index=True
    )
    create_time: Mapped[datetime.datetime] = mapped_column(default=None, server_default=func.now())


class game_results(base):
    __tablename__ = "game_results"

    result_id: Mapped[GameResultID] = mapped_column(primary_key=True)
    test_id: Mapped[TestID]
    student_id: Mapped[UserID]
    score: Mapped[float]
    total_questions: Mapped[int]
    correct_answers: Mapped[int]
    game_type: Mapped[str] = mapped_column(default="memory-match")
    best_streak: Mapped[int] = mapped_column(default=0)
    assignment_id: Mapped[AssignmentID | None] = mapped_column(
        ForeignKey("assignments.assignment_id"), default=None, index=True
    )
    create_time: Mapped[datetime.datetime] = mapped_column(default=None, server_default=func.now())


# Notifications


class notifications(base):
    __tablename__ = "notifications"

    notification_id: Mapped[NotificationID] = mapped_column(primary_key=True)
    recipient_id: Mapped[UserID] = mapped_column(index=True)
    title: Mapped[str]
    message: Mapped[str] = mapped_column(Text)
    related_id: Mapped[str | None] = mapped_column(default=None)
    is_read: Mapped[bool] = mapped_column(default=False)
    create_time: Mapped[datetime.datetime] = mapped_column(default=None, server_default=func.now())
