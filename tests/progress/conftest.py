"""In-memory model builders for tests of the pure progress rules."""

from __future__ import annotations

import datetime
import typing as t

import pytest

from brainburst.model import Assignment, AssignmentID, ClassID, ProgressRecord, TestID, UserID

NOW = datetime.datetime(2026, 3, 2, 12, 0, tzinfo=datetime.UTC)


@pytest.fixture
def now() -> datetime.datetime:
    return NOW


@pytest.fixture
def build_assignment() -> t.Callable[..., Assignment]:
    def build(**fields: t.Any) -> Assignment:
        values: dict[str, t.Any] = {
            "assignment_id": AssignmentID(),
            "class_id": ClassID(),
            "test_id": TestID(),
            "teacher_id": UserID(),
            "title": "Fractions Practice",
            "create_time": NOW - datetime.timedelta(days=7),
            "update_time": NOW - datetime.timedelta(days=7),
        }
        values.update(fields)
        return Assignment(**values)

    return build


@pytest.fixture
def build_record() -> t.Callable[..., ProgressRecord]:
    def build(assignment: Assignment, **fields: t.Any) -> ProgressRecord:
        values: dict[str, t.Any] = {
            "assignment_id": assignment.assignment_id,
            "student_id": UserID(),
            "create_time": NOW - datetime.timedelta(days=7),
            "update_time": NOW - datetime.timedelta(days=1),
        }
        values.update(fields)
        return ProgressRecord(**values)

    return build
