from __future__ import annotations

import datetime
import typing as t

import sqlalchemy as sqla

from brainburst.core import di
from brainburst.lib import is_set, NotSet
from brainburst.model import ArchivalState, Assignment, AssignmentID, ClassID, DEFAULT_MAX_SCORE, TestID, UserID

from . import Session
from .table import assignments


def get(
    assignment_id: AssignmentID,
    *,
    session: Session = di.Provide["storage.persistent.session"],
) -> Assignment | None:
    """Get an assignment by ID."""
    stmt = sqla.select(assignments.__table__).where(assignments.assignment_id == assignment_id)
    row = session.execute(stmt).mappings().one_or_none()
    return Assignment(**row) if row else None


def find(
    *,
    class_id: ClassID | None = None,
    teacher_id: UserID | None = None,
    archival_state: ArchivalState | None = None,
    session: Session = di.Provide["storage.persistent.session"],
) -> tuple[Assignment, ...]:
    """Find assignments matching criteria, oldest first."""
    stmt = sqla.select(assignments.__table__).order_by(assignments.create_time, assignments.assignment_id)
    if class_id is not None:
        stmt = stmt.where(assignments.class_id == class_id)
    if teacher_id is not None:
        stmt = stmt.where(assignments.teacher_id == teacher_id)
    if archival_state is not None:
        stmt = stmt.where(assignments.archival_state == archival_state)
    rows = session.execute(stmt).mappings().all()
    return tuple(Assignment(**row) for row in rows)


def create(
    *,
    class_id: ClassID,
    test_id: TestID,
    teacher_id: UserID,
    title: str,
    due_date: datetime.datetime | None = None,
    attempts_allowed: int | None = None,
    max_score: float = DEFAULT_MAX_SCORE,
    session: Session = di.Provide["storage.persistent.session"],
) -> Assignment:
    """Create a new, active assignment."""
    assignment_id = AssignmentID()
    stmt = sqla.insert(assignments).values(
        assignment_id=assignment_id,
        class_id=class_id,
        test_id=test_id,
        teacher_id=teacher_id,
        title=title,
        due_date=due_date,
        attempts_allowed=attempts_allowed,
        max_score=max_score,
        archival_state=ArchivalState.Active,
    )
    session.execute(stmt)
    session.flush()
    result = get(assignment_id, session=session)
    assert result is not None
    return result


def update(
    assignment_id: AssignmentID,
    *,
    title: str | NotSet = NotSet(),
    due_date: datetime.datetime | None | NotSet = NotSet(),
    attempts_allowed: int | None | NotSet = NotSet(),
    archival_state: ArchivalState | NotSet = NotSet(),
    session: Session = di.Provide["storage.persistent.session"],
) -> None:
    """Change the given fields of an assignment; fields left as NotSet are untouched.

    Raises:
        KeyError: If there is no such assignment
    """
    fields = {
        "title": title,
        "due_date": due_date,
        "attempts_allowed": attempts_allowed,
        "archival_state": archival_state,
    }
    values = {name: value for name, value in fields.items() if is_set(value)}
    # with nothing to change, still match the row so a missing assignment is reported
    values = values or {"assignment_id": assignment_id}

    stmt = sqla.update(assignments).where(assignments.assignment_id == assignment_id).values(**values)
    if session.execute(stmt).rowcount == 0:  # pyright: ignore[reportAttributeAccessIssue]
        raise KeyError(f"no assignment {assignment_id}")
    session.flush()


def delete(
    assignment_id: AssignmentID,
    *,
    session: Session = di.Provide["storage.persistent.session"],
) -> bool:
    """Delete an assignment. Dependent rows must already be gone.

    Returns:
        True if an assignment was deleted, False if not found
    """
    stmt = sqla.delete(assignments).where(assignments.assignment_id == assignment_id)
    result = session.execute(stmt)
    return bool(result.rowcount)  # pyright: ignore[reportUnknownArgumentType, reportAttributeAccessIssue]
