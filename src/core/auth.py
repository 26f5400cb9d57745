"""Authentication module for bearer JWT validation."""
import logging
from datetime import UTC, datetime, timedelta

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from core.config import Settings, get_settings
from db.session import get_async_session
from models.user import User

logger = logging.getLogger(__name__)


# HTTP Bearer token scheme
security = HTTPBearer(auto_error=False)

DEV_USER_EMAIL = "dev@localhost"


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def create_access_token(
    user_id: int,
    settings: Settings,
    email: str | None = None,
    expires_delta: timedelta | None = None,
) -> str:
    """
    Sign an access token for user_id with the shared JWT secret.

    The `sub` claim carries the user id as a string (RFC 7519 requires a string).
    """
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.jwt_expire_minutes)
    now = datetime.now(UTC)
    payload: dict = {"sub": str(user_id), "iat": now, "exp": now + expires_delta}
    if email is not None:
        payload["email"] = email
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str, settings: Settings) -> dict:
    """
    Decode and validate a bearer JWT.

    Raises:
        HTTPException: 401 if the token is malformed, has a bad signature, or is expired.
    """
    try:
        return jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["sub", "exp"]},
        )
    except jwt.ExpiredSignatureError:
        raise _unauthorized("Token has expired")
    except jwt.PyJWTError as e:
        # Log full details for debugging (server-side only)
        logger.warning("JWT validation failed: %s", e, exc_info=True)
        raise _unauthorized("Invalid token")


def _parse_user_id(payload: dict) -> int | None:
    """Extract an integer user id from the `sub` claim, or None if absent/non-numeric."""
    sub = payload.get("sub")
    if isinstance(sub, str) and sub.isascii() and sub.isdecimal():
        return int(sub)
    return None


async def get_or_create_dev_user(db: AsyncSession) -> User:
    """
    Get or create the development user for DEV_MODE.

    Note: Uses flush(), not commit. Session generator handles commit at request end.
    """
    result = await db.execute(select(User).where(User.email == DEV_USER_EMAIL))
    user = result.scalar_one_or_none()
    if user is not None:
        return user

    user = User(email=DEV_USER_EMAIL, first_name="Dev", last_name="User")
    db.add(user)
    try:
        await db.flush()
    except IntegrityError:
        # Race condition: another request created the dev user between SELECT and INSERT
        await db.rollback()
        result = await db.execute(select(User).where(User.email == DEV_USER_EMAIL))
        user = result.scalar_one()
    return user


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    db: AsyncSession = Depends(get_async_session),
    settings: Settings = Depends(get_settings),
) -> User:
    """
    Dependency that validates the bearer token and returns the current user.

    In DEV_MODE, bypasses auth and returns the development user.
    """
    if settings.dev_mode:
        return await get_or_create_dev_user(db)

    if credentials is None:
        raise _unauthorized("Not authenticated")

    payload = decode_access_token(credentials.credentials, settings)

    user_id = _parse_user_id(payload)
    if user_id is None:
        raise _unauthorized("Invalid token: missing sub claim")

    user = await db.get(User, user_id)
    if user is None:
        raise _unauthorized("User not found")

    return user
