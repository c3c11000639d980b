# quintave/api/v1/routes/purchase.py
from datetime import datetime
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Dict

from quintave.crud.user import mark_user_purchased
from quintave.core.database import get_async_session
from quintave.core.auth import User
from quintave.api.deps import get_current_user
from quintave.schemas.purchase import PurchaseStatus, PurchaseConfirm
from quintave.utils.access import compute_access

router = APIRouter(prefix="/purchase", tags=["purchase"])

@router.get("/status", response_model=PurchaseStatus)
async def get_purchase_status(
    user: User = Depends(get_current_user),
):
    access = compute_access(user.created_at, bool(user.has_purchased), datetime.utcnow())
    return PurchaseStatus(
        has_purchased=access.has_purchased,
        trial_active=access.trial_active,
        trial_days_remaining=access.trial_days_remaining,
        trial_ends_at=access.trial_ends_at,
        has_access=access.has_access,
    )

@router.post("/confirm")
async def confirm_purchase(
    confirm_in: PurchaseConfirm,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
) -> Dict[str, bool]:
    """
    Called by the app once RevenueCat reports the entitlement as active, so the
    backend doesn't have to wait for the webhook. Safe to call repeatedly.
    """
    await mark_user_purchased(user, confirm_in.revenuecat_app_user_id, db)
    return {"success": True}
