from __future__ import annotations

import typing as t

import sqlalchemy as sqla

from brainburst.core import di
from brainburst.model import Classroom, ClassID, ClassRoster, UserID

from . import Session
from .table import class_members, classes


def get(
    class_id: ClassID,
    *,
    session: Session = di.Provide["storage.persistent.session"],
) -> Classroom | None:
    """Get a class by ID."""
    stmt = sqla.select(classes.__table__).where(classes.class_id == class_id)
    row = session.execute(stmt).mappings().one_or_none()
    return Classroom(**row) if row else None


def get_roster(
    class_id: ClassID,
    *,
    session: Session = di.Provide["storage.persistent.session"],
) -> ClassRoster | None:
    """Get a class together with the ids of its current members."""
    classroom = get(class_id, session=session)
    if classroom is None:
        return None
    return ClassRoster(**classroom.model_dump(), student_ids=frozenset(find_members(class_id, session=session)))


def find_members(
    class_id: ClassID,
    *,
    session: Session = di.Provide["storage.persistent.session"],
) -> tuple[UserID, ...]:
    stmt = (
        sqla
        .select(class_members.student_id)
        .where(class_members.class_id == class_id)
        .order_by(class_members.create_time, class_members.student_id)
    )
    return tuple(session.execute(stmt).scalars().all())


def is_member(
    class_id: ClassID,
    student_id: UserID,
    *,
    session: Session = di.Provide["storage.persistent.session"],
) -> bool:
    stmt = sqla.select(sqla.literal(True)).where(
        class_members.class_id == class_id, class_members.student_id == student_id
    )
    return session.execute(stmt).scalar_one_or_none() is not None


def create(
    *,
    name: str,
    teacher_id: UserID,
    is_active: bool = True,
    student_ids: t.Iterable[UserID] = (),
    session: Session = di.Provide["storage.persistent.session"],
) -> ClassRoster:
    """Create a class and enroll the given students."""
    class_id = ClassID()
    stmt = sqla.insert(classes).values(class_id=class_id, name=name, teacher_id=teacher_id, is_active=is_active)
    session.execute(stmt)
    for student_id in student_ids:
        add_member(class_id, student_id, session=session)
    session.flush()
    result = get_roster(class_id, session=session)
    assert result is not None
    return result


def add_member(
    class_id: ClassID,
    student_id: UserID,
    *,
    session: Session = di.Provide["storage.persistent.session"],
) -> None:
    session.execute(sqla.insert(class_members).values(class_id=class_id, student_id=student_id))


def set_active(
    class_id: ClassID,
    is_active: bool,
    *,
    session: Session = di.Provide["storage.persistent.session"],
) -> bool:
    """
    Returns:
        True if the class exists
    """
    stmt = sqla.update(classes).where(classes.class_id == class_id).values(is_active=is_active)
    result = session.execute(stmt)
    return bool(result.rowcount)  # pyright: ignore[reportAttributeAccessIssue]
