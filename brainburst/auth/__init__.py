"""Authentication utilities."""

__all__ = [
    "JWTManager",
    "TokenData",
    "get_current_actor",
    "require_role",
    "require_student",
    "require_submitter",
    "require_teacher",
]

from .jwt import JWTManager, TokenData
from .middleware import get_current_actor, require_role, require_student, require_submitter, require_teacher
