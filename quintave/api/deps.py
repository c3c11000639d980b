# quintave/api/deps.py
from datetime import datetime
from typing import Optional
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
import jwt
import uuid

from quintave.core.database import get_async_session
from quintave.core.auth import User, SESSION_TOKEN_AUDIENCE
from quintave.core.config import settings
from quintave.utils.access import compute_access

# Security schemes
optional_security = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def extract_session_token(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = None,
) -> Optional[str]:
    """
    Look for the session token in the places clients send it:
    - Authorization header (native app)
    - Session cookie (web)
    - Query parameter
    """
    if credentials and credentials.credentials:
        return credentials.credentials

    token = request.cookies.get(settings.SESSION_COOKIE_NAME)
    # Remove "Bearer " prefix if present in cookie
    if token and token.startswith("Bearer "):
        token = token[7:]
    if token:
        return token

    return request.query_params.get("token") or request.query_params.get("access_token")


async def get_current_user(
    request: Request,
    db: AsyncSession = Depends(get_async_session),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(optional_security)
) -> User:
    token = extract_session_token(request, credentials)
    if not token:
        raise _unauthorized("Not authenticated")

    secret_key = settings.SECRET_KEY

    try:
        payload = jwt.decode(
            token,
            secret_key,
            algorithms=[settings.ALGORITHM],
            audience=SESSION_TOKEN_AUDIENCE,
        )
    except jwt.ExpiredSignatureError:
        raise _unauthorized("Token has expired")
    except jwt.InvalidTokenError:
        raise _unauthorized("Invalid token")

    user_id_str = payload.get("sub")
    if not user_id_str:
        raise _unauthorized("Invalid token: missing user ID")

    try:
        user_id = uuid.UUID(user_id_str)
    except ValueError:
        raise _unauthorized("Invalid user ID format in token")

    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalars().first()

    if not user:
        raise _unauthorized("User not found")

    if not user.is_active:
        raise _unauthorized("Inactive user")

    return user


async def require_access(user: User = Depends(get_current_user)) -> User:
    """Gate product endpoints behind the trial window or a completed purchase"""
    access = compute_access(user.created_at, bool(user.has_purchased), datetime.utcnow())
    if not access.has_access:
        raise HTTPException(
            status_code=status.HTTP_402_PAYMENT_REQUIRED,
            detail="Trial expired",
        )
    return user
