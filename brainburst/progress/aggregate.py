"""Read-only progress statistics.

Every status is resolved through the resolver against a single clock
reading, so one report never mixes two notions of "now". Nothing here takes
a lock.
"""

from __future__ import annotations

import datetime
import typing as t

from brainburst import storage
from brainburst.core import di
from brainburst.core.provider import TimestampProvider
from brainburst.model import Actor, Assignment, AssignmentID, AssignmentStats, ClassID, ClassSummary, \
    EffectiveStatus, HandledStatuses, NextAssignment, ProgressRecord, ProgressStatus, ResolvedStatuses, \
    StudentSummary, UserID
from brainburst.storage import Session

from .access import load_assignment, load_classroom, require_class_teacher, require_member, require_owner
from .errors import Forbidden
from .resolver import is_past_due, resolve


@di.inject
def aggregate(
    assignment_id: AssignmentID,
    *,
    actor: Actor | None = None,
    session: Session = di.Provide["storage.persistent.session"],
    utcnow: TimestampProvider = di.Provide["utcnow"],
) -> AssignmentStats:
    """Counters for one assignment. When ``actor`` is given, it must own the assignment.

    Raises:
        NotFound: If the assignment does not exist
        Forbidden: If ``actor`` does not own the assignment
    """
    with session.begin():
        assignment = load_assignment(assignment_id, session)
        if actor is not None:
            require_owner(actor, assignment)
        records = storage.progress.find(assignment_id=assignment_id, session=session)
    return summarize(assignment, records, utcnow())


def summarize(assignment: Assignment, records: t.Iterable[ProgressRecord], now: datetime.datetime) -> AssignmentStats:
    stats = AssignmentStats(assignment_id=assignment.assignment_id)
    scores: list[float] = []
    for record in records:
        stats.total += 1
        if record.stored_status in HandledStatuses:
            stats.submitted += 1
        if resolve(record, assignment, now) is EffectiveStatus.Overdue:
            stats.overdue += 1
        if record.stored_status is ProgressStatus.Graded and record.best_score is not None:
            stats.graded += 1
            scores.append(record.best_score)
    stats.average_score = _mean(scores)
    return stats


@di.inject
def class_summary(
    actor: Actor,
    class_id: ClassID,
    *,
    session: Session = di.Provide["storage.persistent.session"],
    utcnow: TimestampProvider = di.Provide["utcnow"],
) -> ClassSummary:
    """Teacher dashboard over the class's active assignments, with a summary per member.

    Raises:
        NotFound: If the class does not exist
        Forbidden: If ``actor`` is not the class's teacher
    """
    with session.begin():
        classroom = load_classroom(class_id, session)
        require_class_teacher(actor, classroom)
        student_ids = storage.classroom.find_members(class_id, session=session)
        assignments = _active_assignments(class_id, session)
        records = storage.progress.find(assignment_ids=list(assignments), session=session)

    now = utcnow()
    summary = ClassSummary(
        class_id=class_id,
        student_count=len(student_ids),
        active_assignment_count=len(assignments),
        overdue_assignment_count=sum(1 for a in assignments.values() if is_past_due(a, now)),
    )
    if records:
        handled = sum(1 for r in records if r.stored_status in HandledStatuses)
        summary.average_progress = round(handled / len(records) * 100)
        summary.last_activity_at = max(r.update_time for r in records)

    by_student: dict[UserID, list[ProgressRecord]] = {sid: [] for sid in student_ids}
    for record in records:
        if record.student_id in by_student:
            by_student[record.student_id].append(record)
    summary.students = [
        _student_summary(sid, assignments, student_records, now) for sid, student_records in by_student.items()
    ]
    return summary


@di.inject
def student_summary(
    actor: Actor,
    class_id: ClassID,
    student_id: UserID | None = None,
    *,
    session: Session = di.Provide["storage.persistent.session"],
    utcnow: TimestampProvider = di.Provide["utcnow"],
) -> StudentSummary:
    """One student's standing in a class, with the next assignment they should work on.

    Students see their own summary; the class's teacher may name any member.

    Raises:
        NotFound: If the class does not exist
        Forbidden: If the actor may not see the student's summary
    """
    sid = student_id if student_id is not None else actor.user_id
    with session.begin():
        classroom = load_classroom(class_id, session)
        if actor.is_teacher:
            require_class_teacher(actor, classroom)
        elif sid != actor.user_id:
            raise Forbidden("students may only see their own summary")
        require_member(sid, class_id, session)
        assignments = _active_assignments(class_id, session)
        records = storage.progress.find(assignment_ids=list(assignments), student_id=sid, session=session)

    now = utcnow()
    summary = _student_summary(sid, assignments, records, now)
    summary.next_assignment = _next_assignment(assignments, records, now)
    return summary


def _active_assignments(class_id: ClassID, session: Session) -> dict[AssignmentID, Assignment]:
    return {
        a.assignment_id: a
        for a in storage.assignment.find(class_id=class_id, session=session)
        if not a.is_archived
    }


def _student_summary(
    student_id: UserID,
    assignments: t.Mapping[AssignmentID, Assignment],
    records: t.Sequence[ProgressRecord],
    now: datetime.datetime,
) -> StudentSummary:
    summary = StudentSummary(student_id=student_id, active_assignment_count=len(assignments))
    scores: list[float] = []
    for record in records:
        if record.stored_status in HandledStatuses:
            summary.submitted_count += 1
        if resolve(record, assignments[record.assignment_id], now) is EffectiveStatus.Overdue:
            summary.overdue_count += 1
        if record.stored_status is ProgressStatus.Graded and record.best_score is not None:
            scores.append(record.best_score)
    summary.average_score = _mean(scores)
    if records:
        summary.last_activity_at = max(r.update_time for r in records)
    return summary


def _next_assignment(
    assignments: t.Mapping[AssignmentID, Assignment], records: t.Sequence[ProgressRecord], now: datetime.datetime
) -> NextAssignment | None:
    """The open assignment due soonest; failing that, the newest open one without a due date."""
    by_assignment = {r.assignment_id: r for r in records}
    open_: list[Assignment] = []
    for assignment in assignments.values():
        record = by_assignment.get(assignment.assignment_id)
        if record is not None and (
            record.stored_status in HandledStatuses or record.stored_status in ResolvedStatuses
        ):
            continue
        if is_past_due(assignment, now):
            continue
        open_.append(assignment)

    dated = sorted((a for a in open_ if a.due_date is not None), key=lambda a: t.cast(datetime.datetime, a.due_date))
    if dated:
        chosen = dated[0]
    elif open_:
        chosen = max(open_, key=lambda a: a.create_time)
    else:
        return None
    return NextAssignment(
        assignment_id=chosen.assignment_id, test_id=chosen.test_id, title=chosen.title, due_date=chosen.due_date
    )


def _mean(scores: t.Sequence[float]) -> float | None:
    if not scores:
        return None
    return round(sum(scores) / len(scores), 2)
