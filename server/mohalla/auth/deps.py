from typing import Callable

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from mohalla.core.config import settings
from mohalla.core.db import get_db
from mohalla.models.user import User

bearer_scheme = HTTPBearer(auto_error=False)

READ_ROLES = ("Admin", "Editor", "Viewer")
WRITE_ROLES = ("Admin", "Editor")

# Primary keys are bound as signed 64-bit integers.
MAX_USER_ID = 2**63 - 1


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def token_user_id(token: str) -> int:
    """Return the numeric user id carried in the token's `sub` claim."""
    try:
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALG])
    except JWTError as exc:
        raise _unauthorized("Invalid token") from exc
    try:
        user_id = int(payload["sub"])
    except (KeyError, TypeError, ValueError) as exc:
        raise _unauthorized("Invalid token payload") from exc
    if not 0 < user_id <= MAX_USER_ID:
        raise _unauthorized("Invalid token payload")
    return user_id


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> User:
    if not credentials:
        raise _unauthorized("Not authenticated")

    user = db.get(User, token_user_id(credentials.credentials))
    if user is None or not user.is_active:
        raise _unauthorized("Inactive user")
    return user


def require_roles(*roles: str) -> Callable[[User], User]:
    def checker(user: User = Depends(get_current_user)) -> User:
        if user.role_names.isdisjoint(roles):
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Insufficient permissions")
        return user

    return checker
