"""The only writer of progress records.

Every operation acts on one (assignment, student) pair and runs its
read-check-write while holding that pair's lock, as a single unit of work.
Writes are compare-and-swap on the record version; a lost race is retried
once and then surfaced as a ConcurrencyConflict.
"""

from __future__ import annotations

import datetime
import logging
import typing as t

import sqlalchemy.exc

from brainburst import storage
from brainburst.core import di
from brainburst.core.provider import TimestampProvider
from brainburst.lib import NotSet
from brainburst.model import Actor, Assignment, AssignmentID, DenialReason, GradedOverride, Override, ProgressRecord, \
    ProgressStatus, ProgressView, ReopenedOverride, UserID, UserRole
from brainburst.model.override import target_status
from brainburst.storage import Session

from . import gate
from .access import load_assignment, load_classroom, require_member, require_owner
from .errors import ConcurrencyConflict, Forbidden, InvalidTransition, NotFound
from .lock import KeyedLock
from .resolver import resolve_view

logger = logging.getLogger(__name__)

T = t.TypeVar("T")

Submittable = frozenset({ProgressStatus.Assigned, ProgressStatus.InProgress})
AttemptStartable = frozenset({ProgressStatus.Assigned, ProgressStatus.Submitted})


@di.inject
def start_attempt(
    actor: Actor,
    assignment_id: AssignmentID,
    *,
    session: Session = di.Provide["storage.persistent.session"],
    utcnow: TimestampProvider = di.Provide["utcnow"],
    locks: KeyedLock = di.Provide["progress.locks"],
) -> ProgressView:
    """Start a fresh attempt, or resume the one in progress.

    A fresh attempt moves an ``assigned`` or ``submitted`` record to
    ``in_progress`` and consumes one attempt; resuming changes nothing.

    Raises:
        NotFound: If the assignment does not exist
        Forbidden: If the actor is not a student of the assignment's class
        InvalidTransition: If the attempt gate refuses; when the attempt limit
            is exhausted the record is blocked before this is raised
    """
    if actor.role is not UserRole.Student:
        raise Forbidden("only students start attempts")
    student_id = actor.user_id

    def unit() -> ProgressView:
        refusal: DenialReason | None = None
        forced: ProgressStatus | None = None
        with session.begin():
            assignment = load_assignment(assignment_id, session)
            classroom = load_classroom(assignment.class_id, session)
            require_member(student_id, assignment.class_id, session)

            now = utcnow()
            record = storage.progress.get(assignment_id, student_id, session=session)
            decision = gate.can_start_attempt(record, assignment, now, class_active=classroom.is_active)
            if decision.reason is not None:
                refusal, forced = decision.reason, decision.forced_transition
                if forced is ProgressStatus.Blocked and record is not None:
                    _write(
                        record,
                        session,
                        stored_status=ProgressStatus.Blocked,
                        blocked_at=now,
                        graded_at=None,
                        excused_at=None,
                    )
            else:
                if record is None:
                    record = storage.progress.create(assignment_id, student_id, session=session)
                if record.stored_status in AttemptStartable:
                    record = _write(
                        record,
                        session,
                        stored_status=ProgressStatus.InProgress,
                        attempt_count=record.attempt_count + 1,
                        started_at=now,
                        last_attempt_at=now,
                    )
                    logger.info(
                        "attempt started",
                        extra={
                            "assignment_id": assignment_id,
                            "student_id": student_id,
                            "attempt_count": record.attempt_count,
                        },
                    )
                view = resolve_view(assignment, student_id, record, now)

        if refusal is not None:
            logger.info(
                "attempt refused",
                extra={
                    "assignment_id": assignment_id,
                    "student_id": student_id,
                    "reason": refusal.value,
                    "forced_transition": forced.value if forced is not None else None,
                },
            )
            raise InvalidTransition(refusal)
        return view

    return _serialized(unit, (assignment_id, student_id), locks)


@di.inject
def record_submission(
    actor: Actor,
    assignment_id: AssignmentID,
    score: float,
    total: float,
    *,
    student_id: UserID | None = None,
    session: Session = di.Provide["storage.persistent.session"],
    utcnow: TimestampProvider = di.Provide["utcnow"],
    locks: KeyedLock = di.Provide["progress.locks"],
) -> ProgressView:
    """Record a finished attempt's score.

    Students report their own submissions; the system actor (the grading
    pipeline) must name the student.

    Raises:
        NotFound: If the assignment or the student's record does not exist
        Forbidden: If a student reports for someone else, or a teacher reports
        InvalidTransition: With reason ``archived`` if the assignment or its class
            is archived, or ``not_submittable`` unless the record is ``assigned``
            or ``in_progress``
    """
    match actor.role:
        case UserRole.Student:
            if student_id is not None and student_id != actor.user_id:
                raise Forbidden("students may only submit their own attempts")
            student_id = actor.user_id
        case UserRole.System:
            if student_id is None:
                raise ValueError("student_id is required for system submissions")
        case _:
            raise Forbidden("only students or the system record submissions")
    sid = student_id

    def unit() -> ProgressView:
        with session.begin():
            assignment = load_assignment(assignment_id, session)
            if actor.role is UserRole.Student:
                require_member(sid, assignment.class_id, session)
            classroom = load_classroom(assignment.class_id, session)
            if assignment.is_archived or not classroom.is_active:
                raise InvalidTransition(DenialReason.Archived, "assignment or class is archived")
            record = storage.progress.get(assignment_id, sid, session=session)
            if record is None:
                raise NotFound(f"no progress record for student {sid}")
            if record.stored_status not in Submittable:
                raise InvalidTransition(
                    DenialReason.NotSubmittable, f"cannot submit from {record.stored_status.value}"
                )

            now = utcnow()
            scaled = scale_score(score, total, assignment.max_score)
            improved = record.best_score is None or scaled > record.best_score
            record = _write(
                record,
                session,
                stored_status=ProgressStatus.Submitted,
                submitted_at=now,
                last_attempt_at=now,
                best_score=scaled if improved else NotSet(),
            )
            logger.info(
                "submission recorded",
                extra={
                    "assignment_id": assignment_id,
                    "student_id": sid,
                    "score": scaled,
                    "best_score": record.best_score,
                },
            )
            return resolve_view(assignment, sid, record, now)

    return _serialized(unit, (assignment_id, sid), locks)


@di.inject
def override(
    actor: Actor,
    assignment_id: AssignmentID,
    student_id: UserID,
    change: Override,
    *,
    session: Session = di.Provide["storage.persistent.session"],
    utcnow: TimestampProvider = di.Provide["utcnow"],
    locks: KeyedLock = di.Provide["progress.locks"],
) -> ProgressView:
    """Set a record's status by teacher decision, creating the record if needed.

    Grading sets ``best_score`` from the given score clamped to the
    assignment's range, or keeps the current one when no score is given.
    Grading, excusing and blocking stamp their own timestamp, clear the other
    two, and store the comment when one is given. Reopening clears all three.

    Raises:
        NotFound: If the assignment does not exist, or the student has no
            record and is not in the class
        Forbidden: If the actor does not own the assignment
    """
    status = target_status(change)

    def unit() -> ProgressView:
        with session.begin():
            assignment = load_assignment(assignment_id, session)
            require_owner(actor, assignment)
            record = storage.progress.get(assignment_id, student_id, session=session)
            if record is None:
                if not storage.classroom.is_member(assignment.class_id, student_id, session=session):
                    raise NotFound(f"student {student_id} is not in the class")
                record = storage.progress.create(assignment_id, student_id, session=session)

            now = utcnow()
            record = _write(record, session, **_override_changes(change, status, record, assignment, now))
            logger.info(
                "progress overridden",
                extra={
                    "assignment_id": assignment_id,
                    "student_id": student_id,
                    "teacher_id": actor.user_id,
                    "status": status.value,
                },
            )
            return resolve_view(assignment, student_id, record, now)

    return _serialized(unit, (assignment_id, student_id), locks)


@di.inject
def reset(
    actor: Actor,
    assignment_id: AssignmentID,
    student_id: UserID,
    *,
    session: Session = di.Provide["storage.persistent.session"],
    utcnow: TimestampProvider = di.Provide["utcnow"],
    locks: KeyedLock = di.Provide["progress.locks"],
) -> ProgressView:
    """Return a record to a clean ``assigned`` state with no attempts used.

    Result history is not touched.

    Raises:
        NotFound: If the assignment or the record does not exist
        Forbidden: If the actor does not own the assignment
    """

    def unit() -> ProgressView:
        with session.begin():
            assignment = load_assignment(assignment_id, session)
            require_owner(actor, assignment)
            record = storage.progress.get(assignment_id, student_id, session=session)
            if record is None:
                raise NotFound(f"no progress record for student {student_id}")

            record = _write(
                record,
                session,
                stored_status=ProgressStatus.Assigned,
                attempt_count=0,
                best_score=None,
                started_at=None,
                submitted_at=None,
                last_attempt_at=None,
                teacher_comment=None,
                graded_at=None,
                excused_at=None,
                blocked_at=None,
            )
            logger.info(
                "progress reset",
                extra={"assignment_id": assignment_id, "student_id": student_id, "teacher_id": actor.user_id},
            )
            return resolve_view(assignment, student_id, record, utcnow())

    return _serialized(unit, (assignment_id, student_id), locks)


def scale_score(score: float, total: float, max_score: float) -> float:
    """Express ``score`` out of ``total`` in the assignment's units, clamped to ``[0, max_score]``."""
    scaled = round(score / total * max_score, 2) if total > 0 else score
    return clamp(scaled, max_score)


def clamp(score: float, max_score: float) -> float:
    return min(max(score, 0.0), max_score)


def _override_changes(
    change: Override,
    status: ProgressStatus,
    record: ProgressRecord,
    assignment: Assignment,
    now: datetime.datetime,
) -> dict[str, t.Any]:
    changes: dict[str, t.Any] = {
        "stored_status": status,
        "graded_at": None,
        "excused_at": None,
        "blocked_at": None,
    }
    match change:
        case ReopenedOverride():
            return changes
        case GradedOverride(score=score):
            changes["graded_at"] = now
            if score is not None:
                changes["best_score"] = clamp(score, assignment.max_score)
        case _ if status is ProgressStatus.Excused:
            changes["excused_at"] = now
        case _:
            changes["blocked_at"] = now

    if change.comment is not None:  # pyright: ignore[reportAttributeAccessIssue]
        changes["teacher_comment"] = change.comment  # pyright: ignore[reportAttributeAccessIssue]
    return changes


def _write(record: ProgressRecord, session: Session, **changes: t.Any) -> ProgressRecord:
    written = storage.progress.update(
        record.assignment_id, record.student_id, expected_version=record.version, session=session, **changes
    )
    if not written:
        raise ConcurrencyConflict(f"progress of {record.student_id} on {record.assignment_id} changed concurrently")
    updated = storage.progress.get(record.assignment_id, record.student_id, session=session)
    if updated is None:
        raise ConcurrencyConflict(f"progress of {record.student_id} on {record.assignment_id} was deleted concurrently")
    return updated


def _serialized(unit: t.Callable[[], T], key: tuple[AssignmentID, UserID], locks: KeyedLock) -> T:
    """Run ``unit`` under the record's lock, retrying once if it loses a race."""
    with locks.hold(key):
        try:
            return _as_conflict(unit)
        except ConcurrencyConflict as e:
            logger.warning(
                "progress write conflict, retrying",
                extra={"assignment_id": key[0], "student_id": key[1], "detail": e.detail},
            )
            return _as_conflict(unit)


def _as_conflict(unit: t.Callable[[], T]) -> T:
    try:
        return unit()
    except sqlalchemy.exc.IntegrityError as e:
        # a concurrent first write created the record
        raise ConcurrencyConflict("progress record was created concurrently") from e
