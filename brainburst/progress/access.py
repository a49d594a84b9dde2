"""Lookups and authorization checks shared by the progress operations.

Each expects to run inside the caller's unit of work.
"""

from __future__ import annotations

from brainburst import storage
from brainburst.model import Actor, Assignment, AssignmentID, Classroom, ClassID, UserID
from brainburst.storage import Session

from .errors import Forbidden, NotFound


def load_assignment(assignment_id: AssignmentID, session: Session) -> Assignment:
    assignment = storage.assignment.get(assignment_id, session=session)
    if assignment is None:
        raise NotFound(f"assignment {assignment_id} not found")
    return assignment


def load_classroom(class_id: ClassID, session: Session) -> Classroom:
    classroom = storage.classroom.get(class_id, session=session)
    if classroom is None:
        raise NotFound(f"class {class_id} not found")
    return classroom


def require_owner(actor: Actor, assignment: Assignment) -> None:
    if not actor.is_teacher or assignment.teacher_id != actor.user_id:
        raise Forbidden("only the teacher who owns the assignment may do this")


def require_class_teacher(actor: Actor, classroom: Classroom) -> None:
    if not actor.is_teacher or classroom.teacher_id != actor.user_id:
        raise Forbidden("only the teacher of the class may do this")


def require_member(student_id: UserID, class_id: ClassID, session: Session) -> None:
    if not storage.classroom.is_member(class_id, student_id, session=session):
        raise Forbidden("student is not a member of the class")
