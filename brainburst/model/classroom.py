from .base import WithTimestamps
from .id import ClassID, UserID


class Classroom(WithTimestamps):
    class_id: ClassID
    name: str
    teacher_id: UserID
    is_active: bool = True


class ClassRoster(Classroom):
    student_ids: frozenset[UserID] = frozenset()

    def has_student(self, user_id: UserID) -> bool:
        return user_id in self.student_ids
