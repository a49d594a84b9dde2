"""Creating, archiving and inspecting assignments."""

from __future__ import annotations

import datetime
import logging
import typing as t

from brainburst import storage
from brainburst.core import di
from brainburst.core.provider import TimestampProvider
from brainburst.model import Actor, ArchivalState, Assignment, AssignmentID, AttemptHistory, ClassID, \
    DEFAULT_MAX_SCORE, ProgressView, TestID, UserID
from brainburst.storage import Session

from .access import load_assignment, load_classroom, require_class_teacher, require_member, require_owner
from .errors import InvalidAssignment, NotFound
from .notifier import AssignmentNotifier
from .resolver import resolve_view

logger = logging.getLogger(__name__)

R = t.TypeVar("R")


@di.inject
def create_assignment(
    actor: Actor,
    class_id: ClassID,
    test_id: TestID,
    title: str,
    *,
    due_date: datetime.datetime | None = None,
    attempts_allowed: int | None = None,
    max_score: float = DEFAULT_MAX_SCORE,
    session: Session = di.Provide["storage.persistent.session"],
    notifier: AssignmentNotifier = di.Provide["progress.notifier"],
) -> Assignment:
    """Create an assignment and seed an ``assigned`` record for every class member.

    Members are notified once the assignment is committed. A failed
    notification is logged and does not undo the assignment.

    Raises:
        NotFound: If the class does not exist
        Forbidden: If the actor is not the class's teacher
        InvalidAssignment: If the limits are out of range, the due date has no
            timezone, or the class is archived
    """
    if attempts_allowed is not None and attempts_allowed <= 0:
        raise InvalidAssignment("attempts_allowed must be positive, or omitted for unlimited attempts")
    if max_score <= 0:
        raise InvalidAssignment("max_score must be positive")
    if due_date is not None and due_date.tzinfo is None:
        raise InvalidAssignment("due_date must include a timezone")
    if not title.strip():
        raise InvalidAssignment("title must not be empty")

    with session.begin():
        classroom = load_classroom(class_id, session)
        require_class_teacher(actor, classroom)
        if not classroom.is_active:
            raise InvalidAssignment(f"class {class_id} is archived")

        student_ids = storage.classroom.find_members(class_id, session=session)
        assignment = storage.assignment.create(
            class_id=class_id,
            test_id=test_id,
            teacher_id=actor.user_id,
            title=title,
            due_date=due_date,
            attempts_allowed=attempts_allowed,
            max_score=max_score,
            session=session,
        )
        seeded = storage.progress.create_many(assignment.assignment_id, student_ids, session=session)

    logger.info(
        "assignment created",
        extra={"assignment_id": assignment.assignment_id, "class_id": class_id, "seeded": seeded},
    )

    if student_ids:
        try:
            with session.begin():
                notifier.assignment_created(assignment, classroom, student_ids, session=session)
        except Exception:
            logger.exception(
                "could not notify students of new assignment", extra={"assignment_id": assignment.assignment_id}
            )
    return assignment


@di.inject
def archive_assignment(
    actor: Actor,
    assignment_id: AssignmentID,
    *,
    session: Session = di.Provide["storage.persistent.session"],
) -> Assignment:
    """Hide an assignment from active views. Its records are kept and no new attempts start."""
    return _set_archival_state(actor, assignment_id, ArchivalState.Archived, session)


@di.inject
def unarchive_assignment(
    actor: Actor,
    assignment_id: AssignmentID,
    *,
    session: Session = di.Provide["storage.persistent.session"],
) -> Assignment:
    return _set_archival_state(actor, assignment_id, ArchivalState.Active, session)


def _set_archival_state(actor: Actor, assignment_id: AssignmentID, state: ArchivalState, session: Session) -> Assignment:
    with session.begin():
        assignment = load_assignment(assignment_id, session)
        require_owner(actor, assignment)
        if assignment.archival_state is not state:
            storage.assignment.update(assignment_id, archival_state=state, session=session)
            assignment = load_assignment(assignment_id, session)
            logger.info("assignment archival state changed", extra={"assignment_id": assignment_id, "state": state})
    return assignment


@di.inject
def list_progress(
    actor: Actor,
    assignment_id: AssignmentID,
    *,
    session: Session = di.Provide["storage.persistent.session"],
    utcnow: TimestampProvider = di.Provide["utcnow"],
) -> list[ProgressView]:
    """Every student's progress on an assignment, with effective statuses.

    Class members without a record (those who joined after the assignment was
    created) are listed as ``assigned``.

    Raises:
        NotFound: If the assignment does not exist
        Forbidden: If the actor does not own the assignment
    """
    with session.begin():
        assignment = load_assignment(assignment_id, session)
        require_owner(actor, assignment)
        records = storage.progress.find(assignment_id=assignment_id, session=session)
        members = storage.classroom.find_members(assignment.class_id, session=session)

    now = utcnow()
    views = [resolve_view(assignment, r.student_id, r, now) for r in records]
    recorded = {r.student_id for r in records}
    views.extend(resolve_view(assignment, sid, None, now) for sid in members if sid not in recorded)
    return views


@di.inject
def get_progress(
    actor: Actor,
    assignment_id: AssignmentID,
    *,
    session: Session = di.Provide["storage.persistent.session"],
    utcnow: TimestampProvider = di.Provide["utcnow"],
) -> ProgressView:
    """The acting student's own progress on an assignment.

    Raises:
        NotFound: If the assignment does not exist
        Forbidden: If the actor is not a member of the assignment's class
    """
    with session.begin():
        assignment = load_assignment(assignment_id, session)
        require_member(actor.user_id, assignment.class_id, session)
        record = storage.progress.get(assignment_id, actor.user_id, session=session)
    return resolve_view(assignment, actor.user_id, record, utcnow())


@di.inject
def attempt_history(
    actor: Actor,
    assignment_id: AssignmentID,
    student_id: UserID,
    *,
    session: Session = di.Provide["storage.persistent.session"],
) -> AttemptHistory:
    """All results a student recorded against an assignment, newest first.

    Raises:
        NotFound: If the assignment does not exist, or the student has neither
            a record nor class membership
        Forbidden: If the actor does not own the assignment
    """
    with session.begin():
        assignment = load_assignment(assignment_id, session)
        require_owner(actor, assignment)
        if storage.progress.get(assignment_id, student_id, session=session) is None and not (
            storage.classroom.is_member(assignment.class_id, student_id, session=session)
        ):
            raise NotFound(f"student {student_id} has no progress on assignment {assignment_id}")
        standard = storage.result.find(assignment_id=assignment_id, student_id=student_id, session=session)
        game = storage.game_result.find(assignment_id=assignment_id, student_id=student_id, session=session)

    return AttemptHistory(
        assignment_id=assignment_id,
        student_id=student_id,
        standard=_newest_first(standard),
        game=_newest_first(game),
    )


def _newest_first(results: t.Sequence[R]) -> list[R]:
    return list(reversed(results))
