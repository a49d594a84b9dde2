"""Tests for brainburst.progress.resolver module."""

from __future__ import annotations

import datetime
import typing as t

import pytest

from brainburst.model import Assignment, EffectiveStatus, ProgressRecord, ProgressStatus, UserID
from brainburst.progress.resolver import attempts_remaining, is_past_due, is_terminal, resolve, resolve_view

BuildAssignment = t.Callable[..., Assignment]
BuildRecord = t.Callable[..., ProgressRecord]


class TestIsTerminal(object):
    """Tests for is_terminal()."""

    @pytest.mark.parametrize(
        "status",
        [ProgressStatus.Submitted, ProgressStatus.Graded, ProgressStatus.Excused, ProgressStatus.Blocked],
    )
    def test_terminal_statuses(self, status: ProgressStatus) -> None:
        """is_terminal() is true for statuses the overdue overlay never touches."""
        assert is_terminal(status)

    @pytest.mark.parametrize("status", [ProgressStatus.Assigned, ProgressStatus.InProgress])
    def test_open_statuses(self, status: ProgressStatus) -> None:
        """is_terminal() is false for assigned and in_progress."""
        assert not is_terminal(status)


class TestIsPastDue(object):
    """Tests for is_past_due()."""

    def test_no_due_date(self, build_assignment: BuildAssignment, now: datetime.datetime) -> None:
        """is_past_due() is never true without a due date."""
        assert not is_past_due(build_assignment(due_date=None), now)

    def test_exactly_at_due_date(self, build_assignment: BuildAssignment, now: datetime.datetime) -> None:
        """is_past_due() is false at the due instant itself."""
        assert not is_past_due(build_assignment(due_date=now), now)

    def test_after_due_date(self, build_assignment: BuildAssignment, now: datetime.datetime) -> None:
        """is_past_due() is true one microsecond after the due date."""
        assignment = build_assignment(due_date=now - datetime.timedelta(microseconds=1))
        assert is_past_due(assignment, now)


class TestResolve(object):
    """Tests for resolve()."""

    def test_missing_record_is_assigned(self, build_assignment: BuildAssignment, now: datetime.datetime) -> None:
        """resolve() treats a missing record as assigned."""
        assert resolve(None, build_assignment(), now) is EffectiveStatus.Assigned

    def test_missing_record_past_due_is_assigned(
        self, build_assignment: BuildAssignment, now: datetime.datetime
    ) -> None:
        """resolve() keeps a missing record assigned after the due date."""
        assignment = build_assignment(due_date=now - datetime.timedelta(days=1))
        assert resolve(None, assignment, now) is EffectiveStatus.Assigned

    @pytest.mark.parametrize("status", [ProgressStatus.Assigned, ProgressStatus.InProgress])
    def test_open_record_past_due_is_overdue(
        self,
        build_assignment: BuildAssignment,
        build_record: BuildRecord,
        now: datetime.datetime,
        status: ProgressStatus,
    ) -> None:
        """resolve() overlays overdue on open records once the due date passes."""
        assignment = build_assignment(due_date=now - datetime.timedelta(hours=1))
        record = build_record(assignment, stored_status=status)
        assert resolve(record, assignment, now) is EffectiveStatus.Overdue

    @pytest.mark.parametrize(
        "status",
        [ProgressStatus.Submitted, ProgressStatus.Graded, ProgressStatus.Excused, ProgressStatus.Blocked],
    )
    def test_terminal_record_past_due_keeps_status(
        self,
        build_assignment: BuildAssignment,
        build_record: BuildRecord,
        now: datetime.datetime,
        status: ProgressStatus,
    ) -> None:
        """resolve() never reports a terminal record as overdue."""
        assignment = build_assignment(due_date=now - datetime.timedelta(days=3))
        record = build_record(assignment, stored_status=status)
        assert resolve(record, assignment, now).value == status.value

    def test_open_record_before_due_keeps_status(
        self, build_assignment: BuildAssignment, build_record: BuildRecord, now: datetime.datetime
    ) -> None:
        """resolve() reports the stored status before the due date."""
        assignment = build_assignment(due_date=now + datetime.timedelta(days=1))
        record = build_record(assignment, stored_status=ProgressStatus.InProgress)
        assert resolve(record, assignment, now) is EffectiveStatus.InProgress

    def test_resolution_is_time_dependent_only(
        self, build_assignment: BuildAssignment, build_record: BuildRecord, now: datetime.datetime
    ) -> None:
        """resolve() flips to overdue as the clock passes the due date, with the record unchanged."""
        assignment = build_assignment(due_date=now)
        record = build_record(assignment)

        assert resolve(record, assignment, now - datetime.timedelta(seconds=1)) is EffectiveStatus.Assigned
        assert resolve(record, assignment, now + datetime.timedelta(seconds=1)) is EffectiveStatus.Overdue
        assert record.stored_status is ProgressStatus.Assigned


class TestResolveView(object):
    """Tests for resolve_view() and attempts_remaining()."""

    def test_view_without_record(self, build_assignment: BuildAssignment, now: datetime.datetime) -> None:
        """resolve_view() reports a student without a record as assigned with every attempt left."""
        assignment = build_assignment(attempts_allowed=3)
        student_id = UserID()

        view = resolve_view(assignment, student_id, None, now)

        assert view.student_id == student_id
        assert view.record is None
        assert view.effective_status is EffectiveStatus.Assigned
        assert view.attempts_remaining == 3

    def test_attempts_remaining_never_negative(
        self, build_assignment: BuildAssignment, build_record: BuildRecord
    ) -> None:
        """attempts_remaining() floors at zero."""
        assignment = build_assignment(attempts_allowed=2)
        record = build_record(assignment, attempt_count=5)
        assert attempts_remaining(record, assignment) == 0

    def test_attempts_remaining_unlimited(self, build_assignment: BuildAssignment, build_record: BuildRecord) -> None:
        """attempts_remaining() is None when attempts are unlimited."""
        assignment = build_assignment(attempts_allowed=None)
        assert attempts_remaining(build_record(assignment, attempt_count=40), assignment) is None
