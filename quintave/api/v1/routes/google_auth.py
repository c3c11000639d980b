# quintave/api/v1/routes/google_auth.py
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession

from quintave.core.auth import create_session_token
from quintave.core.database import get_async_session
from quintave.core.google_auth import (
    PLATFORM_NATIVE,
    PLATFORM_WEB,
    build_login_url,
    decode_state,
    exchange_code_for_token,
)
from quintave.core.config import settings
from quintave.crud.user import upsert_google_user

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Google Authentication"])


def get_redirect_uri(request: Request) -> str:
    """Deployed instances use APP_URL; local dev follows the incoming host"""
    if settings.APP_URL != "http://localhost:3000":
        return settings.oauth_redirect_uri
    proto = request.headers.get("x-forwarded-proto") or request.url.scheme
    return f"{proto}://{request.headers.get('host', request.url.netloc)}/api/oauth/callback"


@router.get("/google")
async def google_login(
    request: Request,
    platform: str = PLATFORM_WEB,
):
    """
    Step 1: send the user to Google's sign-in page.

    - **platform**: `native` when called from the mobile app, so the callback ends in a deep link
    """
    if not settings.GOOGLE_CLIENT_ID:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="GOOGLE_CLIENT_ID is not configured",
        )

    platform = PLATFORM_NATIVE if platform == PLATFORM_NATIVE else PLATFORM_WEB
    auth_url = build_login_url(get_redirect_uri(request), platform)
    return RedirectResponse(url=auth_url)


@router.get("/callback")
async def google_callback(
    code: Optional[str] = None,
    state: Optional[str] = None,
    db: AsyncSession = Depends(get_async_session),
):
    """
    Step 2: Google redirects back here with an authorization code.
    """
    if not code or not state:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="code and state are required",
        )

    try:
        redirect_uri, platform = decode_state(state)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    try:
        _, user_info = await exchange_code_for_token(code, redirect_uri)
    except ValueError as e:
        logger.error(f"[OAuth] Google callback failed: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="OAuth callback failed",
        )

    google_id = user_info.get("sub")
    if not google_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No user ID returned from Google",
        )

    user = await upsert_google_user(
        google_id=google_id,
        email=user_info.get("email"),
        full_name=user_info.get("name"),
        db=db,
    )
    token = await create_session_token(user)

    # Native app: hand back to the app via deep link; web: go to the app root
    redirect_url = settings.NATIVE_OAUTH_REDIRECT if platform == PLATFORM_NATIVE else "/"
    response = RedirectResponse(url=redirect_url, status_code=status.HTTP_302_FOUND)
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        httponly=True,
        max_age=settings.SESSION_TTL_SECONDS,
        secure=settings.COOKIE_SECURE,
        samesite="none" if settings.COOKIE_SECURE else "lax",
        path="/",
    )
    logger.info(f"[OAuth] User {user.id} signed in ({platform})")
    return response
