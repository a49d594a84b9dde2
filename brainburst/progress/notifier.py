"""Fire-and-forget announcements of new assignments."""

from __future__ import annotations

import typing as t

from brainburst import storage
from brainburst.model import Assignment, Classroom, UserID
from brainburst.storage import Session


class AssignmentNotifier(t.Protocol):
    def assignment_created(
        self, assignment: Assignment, classroom: Classroom, recipients: t.Sequence[UserID], *, session: Session
    ) -> None: ...


class StoredNotifier(object):
    """Delivers notifications by writing them to the recipients' inboxes."""

    def assignment_created(
        self, assignment: Assignment, classroom: Classroom, recipients: t.Sequence[UserID], *, session: Session
    ) -> None:
        storage.notification.create_many(
            recipients,
            title="New assignment",
            message=f'"{assignment.title}" was assigned in {classroom.name}',
            related_id=str(assignment.assignment_id),
            session=session,
        )
