"""Assignment and progress routes."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from brainburst import progress
from brainburst.auth import require_student, require_submitter, require_teacher
from brainburst.core import di
from brainburst.model import Actor, AssignmentID, AssignmentStats, AttemptHistory, UserID

from ..view.assignment import AssignmentCreateRequest, AssignmentDeleteResponse, AssignmentResponse, \
    OverrideRequest, ProgressListResponse, ProgressResponse, SubmissionRequest

router = APIRouter(prefix="/api/assignments", tags=["assignments"])


@router.post("", operation_id="create_assignment", status_code=status.HTTP_201_CREATED)
@di.inject
def create_assignment(
    request: AssignmentCreateRequest,
    actor: Actor = Depends(require_teacher),
    session: Session = Depends(di.Manage["storage.persistent.session"]),
) -> AssignmentResponse:
    """Assign a test to a class.

    Every current member of the class starts out ``assigned``.
    """
    assignment = progress.create_assignment(
        actor,
        request.class_id,
        request.test_id,
        request.title,
        due_date=request.due_date,
        attempts_allowed=request.attempts_allowed,
        max_score=request.max_score,
        session=session,
    )
    return AssignmentResponse.from_model(assignment)


@router.delete("/{assignment_id}", operation_id="delete_assignment")
@di.inject
def delete_assignment(
    assignment_id: AssignmentID,
    actor: Actor = Depends(require_teacher),
    session: Session = Depends(di.Manage["storage.persistent.session"]),
) -> AssignmentDeleteResponse:
    """Delete an assignment with its progress records and results."""
    counts = progress.delete_assignment(actor, assignment_id, session=session)
    return AssignmentDeleteResponse(
        assignment_id=assignment_id,
        progress_deleted=counts.progress,
        standard_results_deleted=counts.standard_results,
        game_results_deleted=counts.game_results,
    )


@router.post("/{assignment_id}/archive", operation_id="archive_assignment")
@di.inject
def archive_assignment(
    assignment_id: AssignmentID,
    actor: Actor = Depends(require_teacher),
    session: Session = Depends(di.Manage["storage.persistent.session"]),
) -> AssignmentResponse:
    assignment = progress.archive_assignment(actor, assignment_id, session=session)
    return AssignmentResponse.from_model(assignment)


@router.post("/{assignment_id}/unarchive", operation_id="unarchive_assignment")
@di.inject
def unarchive_assignment(
    assignment_id: AssignmentID,
    actor: Actor = Depends(require_teacher),
    session: Session = Depends(di.Manage["storage.persistent.session"]),
) -> AssignmentResponse:
    assignment = progress.unarchive_assignment(actor, assignment_id, session=session)
    return AssignmentResponse.from_model(assignment)


@router.get("/{assignment_id}/stats", operation_id="get_assignment_stats")
@di.inject
def get_assignment_stats(
    assignment_id: AssignmentID,
    actor: Actor = Depends(require_teacher),
    session: Session = Depends(di.Manage["storage.persistent.session"]),
) -> AssignmentStats:
    """Submission, overdue and grading counters for an assignment."""
    return progress.aggregate(assignment_id, actor=actor, session=session)


@router.get("/{assignment_id}/progress", operation_id="list_progress")
@di.inject
def list_progress(
    assignment_id: AssignmentID,
    actor: Actor = Depends(require_teacher),
    session: Session = Depends(di.Manage["storage.persistent.session"]),
) -> ProgressListResponse:
    """Every student's progress on an assignment."""
    views = progress.list_progress(actor, assignment_id, session=session)
    return ProgressListResponse(
        progress=[ProgressResponse.from_view(v) for v in views],
        total=len(views),
    )


@router.get("/{assignment_id}/progress/me", operation_id="get_my_progress")
@di.inject
def get_my_progress(
    assignment_id: AssignmentID,
    actor: Actor = Depends(require_student),
    session: Session = Depends(di.Manage["storage.persistent.session"]),
) -> ProgressResponse:
    view = progress.get_progress(actor, assignment_id, session=session)
    return ProgressResponse.from_view(view)


@router.post("/{assignment_id}/progress/start", operation_id="start_attempt")
@di.inject
def start_attempt(
    assignment_id: AssignmentID,
    actor: Actor = Depends(require_student),
    session: Session = Depends(di.Manage["storage.persistent.session"]),
) -> ProgressResponse:
    """Start a new attempt, or resume the one in progress.

    A refusal is reported as 409 with the reason. If the refusal is because
    the attempts ran out, the record is blocked.
    """
    view = progress.start_attempt(actor, assignment_id, session=session)
    return ProgressResponse.from_view(view)


@router.post("/{assignment_id}/progress/submit", operation_id="submit_attempt")
@di.inject
def submit_attempt(
    assignment_id: AssignmentID,
    request: SubmissionRequest,
    actor: Actor = Depends(require_submitter),
    session: Session = Depends(di.Manage["storage.persistent.session"]),
) -> ProgressResponse:
    """Record the score of a finished attempt."""
    view = progress.record_submission(
        actor,
        assignment_id,
        request.score,
        request.total,
        student_id=request.student_id,
        session=session,
    )
    return ProgressResponse.from_view(view)


@router.put("/{assignment_id}/progress/{student_id}/status", operation_id="override_progress")
@di.inject
def override_progress(
    assignment_id: AssignmentID,
    student_id: UserID,
    request: OverrideRequest,
    actor: Actor = Depends(require_teacher),
    session: Session = Depends(di.Manage["storage.persistent.session"]),
) -> ProgressResponse:
    """Grade, excuse, block or reopen a student's progress."""
    view = progress.override(actor, assignment_id, student_id, request.root, session=session)
    return ProgressResponse.from_view(view)


@router.post("/{assignment_id}/progress/{student_id}/reset", operation_id="reset_progress")
@di.inject
def reset_progress(
    assignment_id: AssignmentID,
    student_id: UserID,
    actor: Actor = Depends(require_teacher),
    session: Session = Depends(di.Manage["storage.persistent.session"]),
) -> ProgressResponse:
    """Give a student a clean slate: ``assigned`` with no attempts used."""
    view = progress.reset(actor, assignment_id, student_id, session=session)
    return ProgressResponse.from_view(view)


@router.get("/{assignment_id}/progress/{student_id}/attempts", operation_id="get_attempt_history")
@di.inject
def get_attempt_history(
    assignment_id: AssignmentID,
    student_id: UserID,
    actor: Actor = Depends(require_teacher),
    session: Session = Depends(di.Manage["storage.persistent.session"]),
) -> AttemptHistory:
    """Recorded results of one student on an assignment, newest first."""
    return progress.attempt_history(actor, assignment_id, student_id, session=session)
