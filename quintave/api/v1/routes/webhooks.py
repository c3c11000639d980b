# quintave/api/v1/routes/webhooks.py
import hmac
import json
import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from quintave.core.config import settings
from quintave.core.database import get_async_session
from quintave.crud.user import get_user_by_revenuecat_id, mark_user_purchased

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Webhooks"])

# A one-time (non-consumable) purchase only ever produces this event
PURCHASE_EVENT_TYPE = "INITIAL_PURCHASE"


def _received() -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_200_OK, content={"received": True})


@router.post("/revenuecat")
async def revenuecat_webhook(
    request: Request,
    db: AsyncSession = Depends(get_async_session),
):
    """
    RevenueCat server callback. Authenticated by the shared secret configured
    in the RevenueCat dashboard, sent verbatim in the Authorization header.

    Anything other than a completed purchase is acknowledged and ignored. A
    purchase for an app user id we haven't linked yet is also acknowledged:
    the client confirmation covers that race.
    """
    secret = settings.REVENUECAT_WEBHOOK_SECRET
    if not secret:
        logger.warning("[RevenueCat] Webhook secret not configured")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Webhook not configured"},
        )

    auth_header = request.headers.get("authorization") or ""
    if not hmac.compare_digest(auth_header.encode("utf-8"), secret.encode("utf-8")):
        return JSONResponse(status_code=status.HTTP_401_UNAUTHORIZED, content={"error": "Unauthorized"})

    try:
        body = json.loads(await request.body())
    except (json.JSONDecodeError, UnicodeDecodeError):
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": "Invalid JSON"})

    event = body.get("event") if isinstance(body, dict) else None
    if not isinstance(event, dict):
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": "Missing event"})

    if event.get("type") != PURCHASE_EVENT_TYPE:
        return _received()

    app_user_id = event.get("app_user_id")
    if not isinstance(app_user_id, str) or not app_user_id:
        logger.warning(f"[RevenueCat] Ignoring purchase with invalid appUserId: {app_user_id!r}")
        return _received()

    try:
        user = await get_user_by_revenuecat_id(app_user_id, db)
        if not user:
            logger.warning(f"[RevenueCat] No user found for appUserId: {app_user_id}")
            return _received()

        await mark_user_purchased(user, app_user_id, db)
        logger.info(f"[RevenueCat] User {user.id} purchase confirmed")
    except Exception as e:
        logger.error(f"[RevenueCat] Webhook error: {str(e)}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Processing failed"},
        )

    return _received()
