from __future__ import annotations

import datetime
import typing as t

import sqlalchemy as sqla

from brainburst.core import di
from brainburst.lib import is_set, NotSet
from brainburst.model import AssignmentID, ProgressRecord, ProgressStatus, UserID

from . import Session
from .table import assignment_progress


def get(
    assignment_id: AssignmentID,
    student_id: UserID,
    *,
    session: Session = di.Provide["storage.persistent.session"],
) -> ProgressRecord | None:
    """Get the progress record of one student on one assignment."""
    stmt = sqla.select(assignment_progress.__table__).where(
        assignment_progress.assignment_id == assignment_id,
        assignment_progress.student_id == student_id,
    )
    row = session.execute(stmt).mappings().one_or_none()
    return ProgressRecord(**row) if row else None


def find(
    *,
    assignment_id: AssignmentID | None = None,
    assignment_ids: t.Collection[AssignmentID] | None = None,
    student_id: UserID | None = None,
    session: Session = di.Provide["storage.persistent.session"],
) -> tuple[ProgressRecord, ...]:
    """Find progress records matching criteria, in creation order."""
    stmt = sqla.select(assignment_progress.__table__).order_by(
        assignment_progress.create_time, assignment_progress.student_id
    )
    if assignment_id is not None:
        stmt = stmt.where(assignment_progress.assignment_id == assignment_id)
    if assignment_ids is not None:
        if not assignment_ids:
            return ()
        stmt = stmt.where(assignment_progress.assignment_id.in_(assignment_ids))
    if student_id is not None:
        stmt = stmt.where(assignment_progress.student_id == student_id)
    rows = session.execute(stmt).mappings().all()
    return tuple(ProgressRecord(**row) for row in rows)


def create(
    assignment_id: AssignmentID,
    student_id: UserID,
    *,
    session: Session = di.Provide["storage.persistent.session"],
) -> ProgressRecord:
    """Create an ``assigned`` record.

    Raises:
        sqlalchemy.exc.IntegrityError: If the student already has a record for the assignment
    """
    stmt = sqla.insert(assignment_progress).values(
        assignment_id=assignment_id,
        student_id=student_id,
        stored_status=ProgressStatus.Assigned,
        attempt_count=0,
        version=0,
    )
    session.execute(stmt)
    session.flush()
    result = get(assignment_id, student_id, session=session)
    assert result is not None
    return result


def create_many(
    assignment_id: AssignmentID,
    student_ids: t.Iterable[UserID],
    *,
    session: Session = di.Provide["storage.persistent.session"],
) -> int:
    """Seed ``assigned`` records for a set of students; returns the number created."""
    rows = [
        {
            "assignment_id": assignment_id,
            "student_id": student_id,
            "stored_status": ProgressStatus.Assigned,
            "attempt_count": 0,
            "version": 0,
        }
        for student_id in dict.fromkeys(student_ids)
    ]
    if not rows:
        return 0
    session.execute(sqla.insert(assignment_progress), rows)
    session.flush()
    return len(rows)


def update(
    assignment_id: AssignmentID,
    student_id: UserID,
    *,
    expected_version: int,
    stored_status: ProgressStatus | NotSet = NotSet(),
    attempt_count: int | NotSet = NotSet(),
    best_score: float | None | NotSet = NotSet(),
    started_at: datetime.datetime | None | NotSet = NotSet(),
    submitted_at: datetime.datetime | None | NotSet = NotSet(),
    last_attempt_at: datetime.datetime | None | NotSet = NotSet(),
    teacher_comment: str | None | NotSet = NotSet(),
    graded_at: datetime.datetime | None | NotSet = NotSet(),
    excused_at: datetime.datetime | None | NotSet = NotSet(),
    blocked_at: datetime.datetime | None | NotSet = NotSet(),
    session: Session = di.Provide["storage.persistent.session"],
) -> bool:
    """Compare-and-swap update of a progress record.

    The row is written only if its ``version`` still equals
    ``expected_version``; the version is then incremented. Call get() after if
    you need the updated record.

    Returns:
        True if the row was written, False if it is missing or was changed
        since it was read
    """
    changes: dict[str, t.Any] = {
        "stored_status": stored_status,
        "attempt_count": attempt_count,
        "best_score": best_score,
        "started_at": started_at,
        "submitted_at": submitted_at,
        "last_attempt_at": last_attempt_at,
        "teacher_comment": teacher_comment,
        "graded_at": graded_at,
        "excused_at": excused_at,
        "blocked_at": blocked_at,
    }
    values = {k: v for k, v in changes.items() if is_set(v)}
    values["version"] = expected_version + 1

    stmt = (
        sqla
        .update(assignment_progress)
        .where(
            assignment_progress.assignment_id == assignment_id,
            assignment_progress.student_id == student_id,
            assignment_progress.version == expected_version,
        )
        .values(**values)
        .execution_options(synchronize_session=False)
    )
    result = session.execute(stmt)
    session.flush()
    return bool(result.rowcount)  # pyright: ignore[reportAttributeAccessIssue]


def delete_for_assignment(
    assignment_id: AssignmentID,
    *,
    session: Session = di.Provide["storage.persistent.session"],
) -> int:
    """Delete every progress record of an assignment; returns the number deleted."""
    stmt = sqla.delete(assignment_progress).where(assignment_progress.assignment_id == assignment_id)
    result = session.execute(stmt)
    return result.rowcount  # pyright: ignore[reportAttributeAccessIssue]
