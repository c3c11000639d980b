# quintave/api/v1/routes/analytics.py
from datetime import datetime, timedelta
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from quintave.crud.transaction import get_transactions_since
from quintave.core.database import get_async_session
from quintave.core.auth import User
from quintave.api.deps import require_access
from quintave.schemas.analytics import DailyProgress
from quintave.utils.budgeting import build_financial_progress

router = APIRouter(prefix="/analytics", tags=["analytics"])

@router.get("/financial-progress", response_model=List[DailyProgress])
async def get_financial_progress(
    days: int = Query(30, ge=1, le=365, description="How many days back to report"),
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(require_access),
):
    """
    Daily money in / money out for the last `days` days (today included),
    with `net` as the running balance over the window.
    """
    today = datetime.utcnow().date()
    since = datetime.combine(today - timedelta(days=days), datetime.min.time())
    transactions = await get_transactions_since(user.id, since, db)
    return build_financial_progress(transactions, days, today)
