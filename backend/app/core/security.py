"""
Password hashing, JWT issuing and the auth dependencies used by routes.

Tokens carry `sub` (user id as string) and `role`. Role checks re-read the
user row so a deactivated account or a changed role takes effect at once.
"""

from datetime import datetime, timedelta, timezone

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.core.exceptions import AuthenticationError, AuthorizationError
from app.db.session import get_db
from app.domain.enums import UserRole
from app.models.user import User

settings = get_settings()

pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")

# auto_error=False so a missing header is a 401, not FastAPI's default 403
bearer_scheme = HTTPBearer(auto_error=False)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, hashed: str) -> bool:
    return pwd_context.verify(password, hashed)


def create_access_token(data: dict, expires_minutes: int | None = None) -> str:
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + timedelta(
        minutes=expires_minutes or settings.ACCESS_TOKEN_EXPIRE_MINUTES
    )
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> dict:
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        raise AuthenticationError("Invalid or expired token")
    if "sub" not in payload:
        raise AuthenticationError("Invalid token payload")
    return payload


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db),
) -> User:
    if credentials is None:
        raise AuthenticationError()

    payload = decode_access_token(credentials.credentials)
    try:
        user_id = int(payload["sub"])
    except (TypeError, ValueError):
        raise AuthenticationError("Invalid token payload")

    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()
    if not user or not user.is_active:
        raise AuthenticationError("User not found or inactive")
    return user


async def get_current_user_id(user: User = Depends(get_current_user)) -> int:
    return user.id


async def get_optional_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db),
) -> User | None:
    """Like get_current_user, but anonymous requests get None instead of a 401."""
    if credentials is None:
        return None
    return await get_current_user(credentials, db)


def require_roles(*roles: UserRole):
    """Dependency factory: allow the listed roles. Superadmin passes every check."""
    allowed = {r.value for r in roles} | {UserRole.SUPERADMIN.value}

    async def checker(user: User = Depends(get_current_user)) -> User:
        if user.role not in allowed:
            raise AuthorizationError(
                f"Access denied. Required roles: {', '.join(sorted(allowed))}, your role: {user.role}"
            )
        return user

    return checker
