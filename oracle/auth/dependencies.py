"""FastAPI dependencies for authentication and Oracle access control."""
import logging

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from oracle.auth.utils import decode_access_token
from oracle.config import settings
from oracle.database import get_db
from oracle.models import User

logger = logging.getLogger(__name__)

# auto_error=False so a missing header is a 401, not FastAPI's default 403
bearer_scheme = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db),
) -> User:
    """
    Resolve the bearer token to a platform user.

    Raises 401 when the token is missing, invalid, or names an unknown user.
    """
    if credentials is None:
        raise _unauthorized("Not authenticated")

    claims = decode_access_token(credentials.credentials)
    if claims is None:
        raise _unauthorized("Invalid or expired token")

    result = await db.execute(select(User).where(User.id == claims["sub"]))
    user = result.scalar_one_or_none()
    if user is None:
        raise _unauthorized("User not found")

    return user


def require_admin(current_user: User = Depends(get_current_user)) -> User:
    """
    Restrict the Oracle to administrators.

    The role is read from the user row, not the token.
    Raises 403 for any role outside settings.ADMIN_ROLES.
    """
    if current_user.role not in settings.ADMIN_ROLES:
        logger.warning(f"Oracle access denied for user {current_user.id} (role {current_user.role})")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only admins can run financial simulations",
        )
    return current_user
