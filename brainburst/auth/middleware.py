"""Authentication dependencies for FastAPI routes."""

import typing as t

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from brainburst.core import di
from brainburst.model import Actor, UserRole

from .jwt import JWTManager

bearer_scheme = HTTPBearer(auto_error=False)


@di.inject
def get_current_actor(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    jwt_manager: JWTManager = Depends(di.Provide["auth.jwt_manager"]),
) -> Actor:
    """Dependency resolving the bearer token to the acting user.

    Raises:
        HTTPException 401: If no token is provided or the token is invalid
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    token_data = jwt_manager.decode_token(credentials.credentials)
    if token_data is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return token_data.actor


def require_role(*allowed_roles: UserRole) -> t.Callable[..., Actor]:
    """Dependency factory to require specific roles.

    Usage:
        @router.get("/stats")
        def stats(actor: Actor = Depends(require_role(UserRole.Teacher))):
            ...
    """

    def check_role(actor: Actor = Depends(get_current_actor)) -> Actor:
        if actor.role not in allowed_roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Role '{actor.role.value}' not authorized for this resource",
            )
        return actor

    return check_role


require_teacher = require_role(UserRole.Teacher)
require_student = require_role(UserRole.Student)
# submissions are also reported by the grading pipeline
require_submitter = require_role(UserRole.Student, UserRole.System)
