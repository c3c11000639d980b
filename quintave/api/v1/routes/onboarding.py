# quintave/api/v1/routes/onboarding.py
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Dict, Any

from quintave.crud.bucket import get_buckets_for_user
from quintave.crud.user import complete_onboarding
from quintave.core.database import get_async_session
from quintave.core.auth import User
from quintave.api.deps import get_current_user
from quintave.schemas.bucket import BucketRead

router = APIRouter(prefix="/onboarding", tags=["onboarding"])

@router.post("/complete")
async def complete_onboarding_endpoint(
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
) -> Dict[str, Any]:
    """Create the five default buckets (skipping any the user already has) and finish onboarding."""
    await complete_onboarding(user, db)
    buckets = await get_buckets_for_user(user.id, db)
    return {
        "success": True,
        "buckets": [BucketRead.model_validate(b) for b in buckets],
    }
