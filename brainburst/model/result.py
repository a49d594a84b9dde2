from .base import BaseModel, WithCtime
from .id import AssignmentID, GameResultID, StandardResultID, TestID, UserID


class StandardResult(WithCtime):
    result_id: StandardResultID
    assignment_id: AssignmentID | None = None
    test_id: TestID
    student_id: UserID

    score: float
    total: float


class GameResult(WithCtime):
    result_id: GameResultID
    assignment_id: AssignmentID | None = None
    test_id: TestID
    student_id: UserID

    game_type: str = "memory-match"
    score: float
    total_questions: int
    correct_answers: int
    best_streak: int = 0


class AttemptHistory(BaseModel):
    """A student's recorded results for one assignment, newest first."""

    assignment_id: AssignmentID
    student_id: UserID
    standard: list[StandardResult] = []
    game: list[GameResult] = []
