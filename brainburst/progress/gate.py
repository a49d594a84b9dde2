"""Decides whether a student may start (or resume) an attempt."""

from __future__ import annotations

import datetime
import typing as t

from brainburst.model import Assignment, DenialReason, ProgressRecord, ProgressStatus, ResolvedStatuses

from .resolver import is_past_due, is_terminal


class GateDecision(t.NamedTuple):
    # set on every refusal
    reason: DenialReason | None = None
    # a transition to persist even though the attempt is refused
    forced_transition: ProgressStatus | None = None

    @property
    def allowed(self) -> bool:
        return self.reason is None


Allowed: t.Final[GateDecision] = GateDecision()


def can_start_attempt(
    record: ProgressRecord | None,
    assignment: Assignment,
    now: datetime.datetime,
    class_active: bool = True,
) -> GateDecision:
    """
    Checks, in order: archival of the assignment or its class; a resolved
    stored status (graded, excused, blocked); the due date; and the
    attempt limit. Exhausting the limit forces the record to ``blocked``,
    except while an attempt is still in progress.
    """
    if assignment.is_archived or not class_active:
        return GateDecision(reason=DenialReason.Archived)

    stored = record.stored_status if record is not None else ProgressStatus.Assigned
    if stored in ResolvedStatuses:
        return GateDecision(reason=DenialReason.TerminalState)

    # applies to a missing record too, which resolves to assigned
    if not is_terminal(stored) and is_past_due(assignment, now):
        return GateDecision(reason=DenialReason.Overdue)

    attempt_count = record.attempt_count if record is not None else 0
    if (
        assignment.attempts_allowed is not None
        and attempt_count >= assignment.attempts_allowed
        and stored is not ProgressStatus.InProgress
    ):
        return GateDecision(
            reason=DenialReason.AttemptsExhausted,
            forced_transition=ProgressStatus.Blocked,
        )

    return Allowed
