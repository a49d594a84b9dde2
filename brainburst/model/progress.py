import datetime

from .base import BaseModel, WithTimestamps
from .enum import EffectiveStatus, ProgressStatus
from .id import AssignmentID, UserID

# states immune to the overdue overlay
TerminalStatuses = frozenset({
    ProgressStatus.Submitted,
    ProgressStatus.Graded,
    ProgressStatus.Excused,
    ProgressStatus.Blocked,
})

# terminal outcomes set by a teacher (or by attempt exhaustion); no further attempts
ResolvedStatuses = frozenset({
    ProgressStatus.Graded,
    ProgressStatus.Excused,
    ProgressStatus.Blocked,
})

# stored statuses counted as handled by aggregation
HandledStatuses = frozenset({
    ProgressStatus.Submitted,
    ProgressStatus.Graded,
    ProgressStatus.Excused,
})


class ProgressRecord(WithTimestamps):
    assignment_id: AssignmentID
    student_id: UserID

    stored_status: ProgressStatus = ProgressStatus.Assigned
    attempt_count: int = 0
    best_score: float | None = None

    started_at: datetime.datetime | None = None
    submitted_at: datetime.datetime | None = None
    last_attempt_at: datetime.datetime | None = None

    teacher_comment: str | None = None
    graded_at: datetime.datetime | None = None
    excused_at: datetime.datetime | None = None
    blocked_at: datetime.datetime | None = None

    version: int = 0


class ProgressView(BaseModel):
    """A progress record paired with its freshly resolved effective status.

    ``record`` is None for a student who has no record yet.
    """

    assignment_id: AssignmentID
    student_id: UserID
    effective_status: EffectiveStatus
    record: ProgressRecord | None = None
    # None when the assignment allows unlimited attempts
    attempts_remaining: int | None = None
