from __future__ import annotations

import typing as t

import sqlalchemy as sqla

from brainburst.core import di
from brainburst.model import Notification, NotificationID, UserID

from . import Session
from .table import notifications


def find(
    *,
    recipient_id: UserID | None = None,
    related_id: str | None = None,
    session: Session = di.Provide["storage.persistent.session"],
) -> tuple[Notification, ...]:
    stmt = sqla.select(notifications.__table__).order_by(notifications.create_time.desc())
    if recipient_id is not None:
        stmt = stmt.where(notifications.recipient_id == recipient_id)
    if related_id is not None:
        stmt = stmt.where(notifications.related_id == related_id)
    rows = session.execute(stmt).mappings().all()
    return tuple(Notification(**row) for row in rows)


def create_many(
    recipient_ids: t.Iterable[UserID],
    *,
    title: str,
    message: str,
    related_id: str | None = None,
    session: Session = di.Provide["storage.persistent.session"],
) -> int:
    """Send the same notification to each recipient; returns the number created."""
    rows = [
        {
            "notification_id": NotificationID(),
            "recipient_id": recipient_id,
            "title": title,
            "message": message,
            "related_id": related_id,
            "is_read": False,
        }
        for recipient_id in recipient_ids
    ]
    if not rows:
        return 0
    session.execute(sqla.insert(notifications), rows)
    session.flush()
    return len(rows)
