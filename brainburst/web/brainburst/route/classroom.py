"""Class dashboard routes."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from brainburst import progress
from brainburst.auth import get_current_actor, require_student, require_teacher
from brainburst.core import di
from brainburst.model import Actor, ClassID, ClassSummary, StudentSummary, UserID

router = APIRouter(prefix="/api/classes", tags=["classes"])


@router.get("/{class_id}/summary", operation_id="get_class_summary")
@di.inject
def get_class_summary(
    class_id: ClassID,
    actor: Actor = Depends(require_teacher),
    session: Session = Depends(di.Manage["storage.persistent.session"]),
) -> ClassSummary:
    """Teacher dashboard: progress across the class's active assignments.

    Only the class's teacher can view it.
    """
    return progress.class_summary(actor, class_id, session=session)


@router.get("/{class_id}/me/summary", operation_id="get_my_summary")
@di.inject
def get_my_summary(
    class_id: ClassID,
    actor: Actor = Depends(require_student),
    session: Session = Depends(di.Manage["storage.persistent.session"]),
) -> StudentSummary:
    """Student dashboard, including the next assignment to work on."""
    return progress.student_summary(actor, class_id, session=session)


@router.get("/{class_id}/students/{student_id}/summary", operation_id="get_student_summary")
@di.inject
def get_student_summary(
    class_id: ClassID,
    student_id: UserID,
    actor: Actor = Depends(get_current_actor),
    session: Session = Depends(di.Manage["storage.persistent.session"]),
) -> StudentSummary:
    """One student's standing in the class; visible to the class's teacher and to the student."""
    return progress.student_summary(actor, class_id, student_id, session=session)
