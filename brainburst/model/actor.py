import typing as t

from .enum import UserRole
from .id import UserID


class Actor(t.NamedTuple):
    """The identity an operation is performed on behalf of."""

    user_id: UserID
    role: UserRole

    @property
    def is_teacher(self) -> bool:
        return self.role is UserRole.Teacher

    @property
    def is_system(self) -> bool:
        return self.role is UserRole.System


# operators acting through the command line or the grading pipeline
SYSTEM_ACTOR = Actor(user_id=UserID(key="2" * 22), role=UserRole.System)
