# quintave/crud/user.py
import logging
from datetime import datetime
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from quintave.core.auth import User
from quintave.crud.bucket import seed_default_buckets_for_user
from typing import Optional
import uuid

logger = logging.getLogger(__name__)

async def get_user_by_id(user_id: uuid.UUID, db: AsyncSession) -> Optional[User]:
    result = await db.execute(select(User).where(User.id == user_id))
    return result.scalar_one_or_none()

async def get_user_by_google_id(google_id: str, db: AsyncSession) -> Optional[User]:
    result = await db.execute(select(User).where(User.google_id == google_id))
    return result.scalar_one_or_none()

async def get_user_by_revenuecat_id(revenuecat_app_user_id: str, db: AsyncSession) -> Optional[User]:
    result = await db.execute(
        select(User).where(User.revenuecat_app_user_id == revenuecat_app_user_id).limit(1)
    )
    return result.scalars().first()

async def upsert_google_user(
    google_id: str,
    email: Optional[str],
    full_name: Optional[str],
    db: AsyncSession,
) -> User:
    """Create the user on first Google sign-in, otherwise refresh profile fields and last_signed_in."""
    now = datetime.utcnow()
    user = await get_user_by_google_id(google_id, db)

    if user is None:
        user = User(
            google_id=google_id,
            email=email,
            full_name=full_name,
            hashed_password="",  # No password for Google users
            is_active=True,
            is_verified=True,  # Google already verified the email
            login_method="google",
            created_at=now,
            last_signed_in=now,
        )
        db.add(user)
        logger.info(f"Creating user for Google account {google_id}")
    else:
        if email:
            user.email = email
        if full_name:
            user.full_name = full_name
        user.login_method = "google"
        user.last_signed_in = now
        db.add(user)

    await db.commit()
    await db.refresh(user)
    return user

async def mark_user_purchased(user: User, revenuecat_app_user_id: str, db: AsyncSession) -> User:
    """
    Merge a confirmed purchase into the user's state.

    Both the client confirmation and the RevenueCat webhook land here. The flag
    only moves False -> True and `purchased_at` keeps its first value, so
    repeated calls leave the row as it was.
    """
    changed = False
    if not user.has_purchased:
        user.has_purchased = True
        changed = True
    if user.purchased_at is None:
        user.purchased_at = datetime.utcnow()
        changed = True
    if revenuecat_app_user_id and user.revenuecat_app_user_id != revenuecat_app_user_id:
        user.revenuecat_app_user_id = revenuecat_app_user_id
        changed = True

    if not changed:
        logger.info(f"[Purchase] User {user.id} already marked as purchased")
        return user

    db.add(user)
    await db.commit()
    await db.refresh(user)
    logger.info(f"[Purchase] User {user.id} purchase recorded (RevenueCat id {revenuecat_app_user_id})")
    return user

async def complete_onboarding(user: User, db: AsyncSession) -> User:
    """Give the user their default buckets and flag onboarding as done, in one commit."""
    try:
        await seed_default_buckets_for_user(user.id, db)
        user.has_completed_onboarding = True
        db.add(user)
        await db.commit()
    except Exception:
        await db.rollback()
        raise
    await db.refresh(user)
    return user
