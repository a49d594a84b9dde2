"""View models for assignments and their progress."""

from __future__ import annotations

import datetime

import pydantic as p

from brainburst.model import ArchivalState, Assignment, AssignmentID, ClassID, DEFAULT_MAX_SCORE, EffectiveStatus, \
    Override, ProgressStatus, ProgressView, TestID, UserID


class AssignmentCreateRequest(p.BaseModel):
    """Request to assign a test to a class."""

    class_id: ClassID
    test_id: TestID
    title: str
    due_date: datetime.datetime | None = None
    attempts_allowed: int | None = None
    max_score: float = DEFAULT_MAX_SCORE


class AssignmentResponse(p.BaseModel):
    """Assignment details response."""

    assignment_id: AssignmentID
    class_id: ClassID
    test_id: TestID
    teacher_id: UserID
    title: str
    due_date: datetime.datetime | None = None
    attempts_allowed: int | None = None
    max_score: float
    archival_state: ArchivalState
    create_time: datetime.datetime
    update_time: datetime.datetime | None = None

    @classmethod
    def from_model(cls, assignment: Assignment) -> AssignmentResponse:
        return cls(**assignment.model_dump(include=set(cls.model_fields)))


class SubmissionRequest(p.BaseModel):
    """A finished attempt's raw score.

    ``student_id`` is only accepted from the grading pipeline.
    """

    score: float
    total: float = p.Field(gt=0)
    student_id: UserID | None = None


class OverrideRequest(p.RootModel[Override]):
    """A teacher decision, discriminated by the target ``status``."""


class ProgressResponse(p.BaseModel):
    """One student's progress with its effective status."""

    assignment_id: AssignmentID
    student_id: UserID
    status: EffectiveStatus
    stored_status: ProgressStatus
    attempt_count: int = 0
    # None when attempts are unlimited
    attempts_remaining: int | None = None
    best_score: float | None = None
    started_at: datetime.datetime | None = None
    submitted_at: datetime.datetime | None = None
    last_attempt_at: datetime.datetime | None = None
    teacher_comment: str | None = None
    graded_at: datetime.datetime | None = None
    excused_at: datetime.datetime | None = None
    blocked_at: datetime.datetime | None = None
    update_time: datetime.datetime | None = None

    @classmethod
    def from_view(cls, view: ProgressView) -> ProgressResponse:
        record = view.record
        if record is None:
            return cls(
                assignment_id=view.assignment_id,
                student_id=view.student_id,
                status=view.effective_status,
                stored_status=ProgressStatus.Assigned,
                attempts_remaining=view.attempts_remaining,
            )
        return cls(
            assignment_id=view.assignment_id,
            student_id=view.student_id,
            status=view.effective_status,
            stored_status=record.stored_status,
            attempt_count=record.attempt_count,
            attempts_remaining=view.attempts_remaining,
            best_score=record.best_score,
            started_at=record.started_at,
            submitted_at=record.submitted_at,
            last_attempt_at=record.last_attempt_at,
            teacher_comment=record.teacher_comment,
            graded_at=record.graded_at,
            excused_at=record.excused_at,
            blocked_at=record.blocked_at,
            update_time=record.update_time,
        )


class ProgressListResponse(p.BaseModel):
    """Every student's progress on an assignment."""

    progress: list[ProgressResponse]
    total: int


class AssignmentDeleteResponse(p.BaseModel):
    """What was removed along with an assignment."""

    assignment_id: AssignmentID
    progress_deleted: int
    standard_results_deleted: int
    game_results_deleted: int
