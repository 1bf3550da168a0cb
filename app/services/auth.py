import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from passlib.context import CryptContext
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from structlog import get_logger

from app.config import settings
from app.core.errors import AlreadyExistsError, AuthError
from app.models import User
from app.schemas.user import LoginRequest, RegisterRequest

logger = get_logger()

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    return pwd_context.verify(password, password_hash)


def create_access_token(user_id: uuid.UUID, expires_in: Optional[timedelta] = None) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "iat": now,
        "exp": now + (expires_in or timedelta(days=settings.JWT_EXPIRES_DAYS)),
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> uuid.UUID:
    """Return the user id carried by a bearer token, or raise AuthError."""
    try:
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise AuthError("Token expired")
    except jwt.InvalidTokenError:
        raise AuthError("Invalid token")
    try:
        return uuid.UUID(payload["sub"])
    except (KeyError, TypeError, ValueError):
        raise AuthError("Invalid token payload")


async def get_user_by_email(db: AsyncSession, email: str) -> Optional[User]:
    result = await db.execute(select(User).where(User.email == email))
    return result.scalars().first()


async def register_user(db: AsyncSession, request: RegisterRequest) -> User:
    if await get_user_by_email(db, request.email):
        logger.info("Registration rejected, email in use", email=request.email)
        raise AlreadyExistsError("User already exists")

    user = User(
        name=request.name,
        email=request.email,
        password_hash=hash_password(request.password),
        phone=request.phone,
    )
    db.add(user)
    await db.commit()
    logger.info("User registered", user_id=str(user.id))
    return user


async def authenticate(db: AsyncSession, request: LoginRequest) -> User:
    user = await get_user_by_email(db, request.email)
    if user is None or not verify_password(request.password, user.password_hash):
        logger.info("Login failed", email=request.email)
        raise AuthError("Invalid credentials")
    return user
