"""Effective status of a progress record.

Overdue is an overlay computed on every read and never stored: a record that
is not yet terminal reads as overdue once the assignment's due date has
passed. A student with no record at all reads as assigned, due date or not.
"""

from __future__ import annotations

import datetime

from brainburst.model import Assignment, EffectiveStatus, ProgressRecord, ProgressStatus, ProgressView, \
    TerminalStatuses, UserID


def is_terminal(status: ProgressStatus) -> bool:
    return status in TerminalStatuses


def is_past_due(assignment: Assignment, now: datetime.datetime) -> bool:
    return assignment.due_date is not None and now > assignment.due_date


def resolve(record: ProgressRecord | None, assignment: Assignment, now: datetime.datetime) -> EffectiveStatus:
    if record is None:
        return EffectiveStatus.Assigned
    stored = record.stored_status
    if is_terminal(stored):
        return EffectiveStatus(stored.value)
    if is_past_due(assignment, now):
        return EffectiveStatus.Overdue
    return EffectiveStatus(stored.value)


def resolve_view(
    assignment: Assignment, student_id: UserID, record: ProgressRecord | None, now: datetime.datetime
) -> ProgressView:
    return ProgressView(
        assignment_id=assignment.assignment_id,
        student_id=student_id,
        effective_status=resolve(record, assignment, now),
        record=record,
        attempts_remaining=attempts_remaining(record, assignment),
    )


def attempts_remaining(record: ProgressRecord | None, assignment: Assignment) -> int | None:
    if assignment.attempts_allowed is None:
        return None
    used = record.attempt_count if record is not None else 0
    return max(0, assignment.attempts_allowed - used)
