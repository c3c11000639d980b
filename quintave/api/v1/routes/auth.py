# quintave/api/v1/routes/auth.py
from fastapi import APIRouter, Depends, Response, status

from quintave.core.auth import User
from quintave.core.config import settings
from quintave.api.deps import get_current_user
from quintave.schemas.user import UserRead

router = APIRouter(prefix="/auth", tags=["Authentication"])

@router.get("/me", response_model=UserRead)
async def read_current_user(
    user: User = Depends(get_current_user),
):
    """Get current user's profile"""
    return user

@router.post("/logout", status_code=status.HTTP_200_OK)
async def logout(response: Response):
    """
    Logout endpoint that doesn't require authentication.
    Clears the session cookie if present.
    """
    response.delete_cookie(key=settings.SESSION_COOKIE_NAME, path="/")
    return {"success": True}
