from __future__ import annotations

import sqlalchemy as sqla

from brainburst.core import di
from brainburst.model import AssignmentID, GameResult, GameResultID, TestID, UserID

from . import Session
from .table import game_results


def get(
    result_id: GameResultID,
    *,
    session: Session = di.Provide["storage.persistent.session"],
) -> GameResult | None:
    stmt = sqla.select(game_results.__table__).where(game_results.result_id == result_id)
    row = session.execute(stmt).mappings().one_or_none()
    return GameResult(**row) if row else None


def find(
    *,
    assignment_id: AssignmentID | None = None,
    student_id: UserID | None = None,
    session: Session = di.Provide["storage.persistent.session"],
) -> tuple[GameResult, ...]:
    stmt = sqla.select(game_results.__table__).order_by(game_results.create_time)
    if assignment_id is not None:
        stmt = stmt.where(game_results.assignment_id == assignment_id)
    if student_id is not None:
        stmt = stmt.where(game_results.student_id == student_id)
    rows = session.execute(stmt).mappings().all()
    return tuple(GameResult(**row) for row in rows)


def create(
    *,
    test_id: TestID,
    student_id: UserID,
    score: float,
    total_questions: int,
    correct_answers: int,
    best_streak: int = 0,
    game_type: str = "memory-match",
    assignment_id: AssignmentID | None = None,
    session: Session = di.Provide["storage.persistent.session"],
) -> GameResult:
    result_id = GameResultID()
    stmt = sqla.insert(game_results).values(
        result_id=result_id,
        assignment_id=assignment_id,
        test_id=test_id,
        student_id=student_id,
        game_type=game_type,
        score=score,
        total_questions=total_questions,
        correct_answers=correct_answers,
        best_streak=best_streak,
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
    stmt = sqla.delete(game_results).where(game_results.assignment_id == assignment_id)
    result = session.execute(stmt)
    return result.rowcount  # pyright: ignore[reportAttributeAccessIssue]
