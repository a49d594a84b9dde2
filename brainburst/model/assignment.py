import datetime
import typing as t

import annotated_types as ant

from .base import WithTimestamps
from .enum import ArchivalState
from .id import AssignmentID, ClassID, TestID, UserID

DEFAULT_MAX_SCORE = 100.0


class Assignment(WithTimestamps):
    assignment_id: AssignmentID
    class_id: ClassID
    test_id: TestID
    teacher_id: UserID
    title: str

    due_date: datetime.datetime | None = None
    attempts_allowed: t.Annotated[int, ant.Gt(0)] | None = None
    max_score: t.Annotated[float, ant.Gt(0)] = DEFAULT_MAX_SCORE
    archival_state: ArchivalState = ArchivalState.Active

    @property
    def is_archived(self) -> bool:
        return self.archival_state is ArchivalState.Archived
