from __future__ import annotations

import sqlalchemy as sqla

from brainburst.core import di
from brainburst.model import AssignmentID, StandardResult, StandardResultID, TestID, UserID

from . import Session
from .table import standard_results


def get(
    result_id: StandardResultID,
    *,
    session: Session = di.Provide["storage.persistent.session"],
) -> StandardResult | None:
    stmt = sqla.select(standard_results.__table__).where(standard_results.result_id == result_id)
    row = session.execute(stmt).mappings().one_or_none()
    return StandardResult(**row) if row else None


def find(
    *,
    assignment_id: AssignmentID | None = None,
    student_id: UserID | None = None,
    session: Session = di.Provide["storage.persistent.session"],
) -> tuple[StandardResult, ...]:
    stmt = sqla.select(standard_results.__table__).order_by(standard_results.create_time)
    if assignment_id is not None:
        stmt = stmt.where(standard_results.assignment_id == assignment_id)
    if student_id is not None:
        stmt = stmt.where(standard_results.student_id == student_id)
    rows = session.execute(stmt).mappings().all()
    return tuple(StandardResult(**row) for row in rows)


def create(
    *,
    test_id: TestID,
    student_id: UserID,
    score: float,
    total: float,
    assignment_id: AssignmentID | None = None,
    session: Session = di.Provide["storage.persistent.session"],
) -> StandardResult:
    result_id = StandardResultID()
    stmt = sqla.insert(standard_results).values(
        result_id=result_id,
        assignment_id=assignment_id,
        test_id=test_id,
        student_id=student_id,
        score=score,
        total=total,
    )
    session.execute(stmt)
    session.flush()
    result = get(result_id, session=session)
    assert result is not None
    return result


def delete_for_assignment(
    assignment_id: AssignmentID,
    *,
    session: Session = di.Provide["storage.persistent.session"],
) -> int:
    stmt = sqla.delete(standard_results).where(standard_results.assignment_id == assignment_id)
    result = session.execute(stmt)
    return result.rowcount  # pyright: ignore[reportAttributeAccessIssue]
