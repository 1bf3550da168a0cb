from typing import Optional

from fastapi import Depends, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession
from structlog import get_logger

from app.core.errors import AuthError, PermissionDeniedError
from app.database import get_session
from app.models import User
from app.services.auth import decode_access_token
from app.services.user import get_user

logger = get_logger()
security = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(security),
    db: AsyncSession = Depends(get_session),
) -> User:
    if credentials is None:
        raise AuthError("Not authenticated")
    user_id = decode_access_token(credentials.credentials)
    user = await get_user(db, user_id)
    if user is None:
        logger.warning("Token refers to unknown user", user_id=str(user_id))
        raise AuthError("User not found")
    return user


async def require_admin(user: User = Depends(get_current_user)) -> User:
    if user.role != "admin":
        logger.warning("Admin route denied", user_id=str(user.id), role=user.role)
        raise PermissionDeniedError("Admin access required")
    return user
