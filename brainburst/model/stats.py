import datetime

from .base import BaseModel
from .id import AssignmentID, ClassID, TestID, UserID


class AssignmentStats(BaseModel):
    assignment_id: AssignmentID
    total: int = 0
    # stored status submitted, graded or excused
    submitted: int = 0
    overdue: int = 0
    graded: int = 0
    average_score: float | None = None


class NextAssignment(BaseModel):
    assignment_id: AssignmentID
    test_id: TestID
    title: str
    due_date: datetime.datetime | None = None


class StudentSummary(BaseModel):
    student_id: UserID
    active_assignment_count: int = 0
    submitted_count: int = 0
    overdue_count: int = 0
    average_score: float | None = None
    last_activity_at: datetime.datetime | None = None
    next_assignment: NextAssignment | None = None


class ClassSummary(BaseModel):
    class_id: ClassID
    student_count: int = 0
    active_assignment_count: int = 0
    # active assignments whose due date has passed
    overdue_assignment_count: int = 0
    # percentage of progress records on active assignments that are handled
    average_progress: int = 0
    last_activity_at: datetime.datetime | None = None
    students: list[StudentSummary] = []
