# quintave/crud/bucket.py
import logging
from decimal import Decimal
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy import func
from typing import List, Optional
import uuid

from quintave.core.auth import User
from quintave.core.config import settings
from quintave.core.db_utils import return_default_on_db_error
from quintave.models.bucket import Bucket
from quintave.schemas.bucket import BucketCreate

logger = logging.getLogger(__name__)


class BucketLimitError(ValueError):
    """Raised when a user already holds the maximum number of buckets."""

    def __init__(self, limit: int):
        self.limit = limit
        super().__init__(f"Maximum of {limit} buckets allowed")


# The five envelopes every user starts with after onboarding
DEFAULT_BUCKETS: List[str] = [
    "Play Money",
    "Expenses",
    "Savings",
    "Investments",
    "Education",
]


@return_default_on_db_error(list)
async def get_buckets_for_user(user_id: uuid.UUID, db: AsyncSession) -> List[Bucket]:
    result = await db.execute(
        select(Bucket).where(Bucket.user_id == user_id).order_by(Bucket.created_at, Bucket.name)
    )
    return result.scalars().all()

async def get_bucket_by_id(bucket_id: uuid.UUID, user_id: uuid.UUID, db: AsyncSession) -> Optional[Bucket]:
    result = await db.execute(
        select(Bucket).where(Bucket.id == bucket_id, Bucket.user_id == user_id)
    )
    return result.scalar_one_or_none()

async def lock_buckets_for_user(user_id: uuid.UUID, db: AsyncSession) -> List[Bucket]:
    """Load the user's buckets with row locks held until the surrounding commit."""
    result = await db.execute(
        select(Bucket).where(Bucket.user_id == user_id).with_for_update()
    )
    return result.scalars().all()

async def lock_bucket(bucket_id: uuid.UUID, user_id: uuid.UUID, db: AsyncSession) -> Optional[Bucket]:
    result = await db.execute(
        select(Bucket).where(Bucket.id == bucket_id, Bucket.user_id == user_id).with_for_update()
    )
    return result.scalar_one_or_none()

async def _count_buckets_locked(user_id: uuid.UUID, db: AsyncSession) -> int:
    # Locking the owner row serializes concurrent creates for the same user
    await db.execute(select(User.id).where(User.id == user_id).with_for_update())
    result = await db.execute(
        select(func.count()).select_from(Bucket).where(Bucket.user_id == user_id)
    )
    return result.scalar_one() or 0

async def create_bucket_for_user(user_id: uuid.UUID, bucket_in: BucketCreate, db: AsyncSession) -> Bucket:
    try:
        existing = await _count_buckets_locked(user_id, db)
        if existing >= settings.MAX_BUCKETS:
            raise BucketLimitError(settings.MAX_BUCKETS)

        new_bucket = Bucket(
            user_id=user_id,
            name=bucket_in.name,
            balance=bucket_in.balance,
            allocated=Decimal("0.00"),
        )
        db.add(new_bucket)
        await db.commit()
    except Exception:
        await db.rollback()
        raise
    await db.refresh(new_bucket)
    return new_bucket

async def update_bucket_balance(bucket: Bucket, new_balance: Decimal, db: AsyncSession) -> Bucket:
    bucket.balance = new_balance
    db.add(bucket)
    await db.commit()
    await db.refresh(bucket)
    return bucket

async def seed_default_buckets_for_user(user_id: uuid.UUID, db: AsyncSession) -> List[Bucket]:
    """Create whichever default buckets the user is missing, up to the bucket cap.

    Returns the buckets that were created (empty if none were needed). Does not commit.
    """
    # Same owner-row lock as create_bucket_for_user, so the cap holds across both paths
    existing_count = await _count_buckets_locked(user_id, db)
    result = await db.execute(select(Bucket.name).where(Bucket.user_id == user_id))
    existing_names_lower = {row[0].lower() for row in result.all()}
    free_slots = settings.MAX_BUCKETS - existing_count

    buckets_to_create: List[Bucket] = []
    for name in DEFAULT_BUCKETS:
        if len(buckets_to_create) >= free_slots:
            break
        if name.lower() not in existing_names_lower:
            buckets_to_create.append(
                Bucket(user_id=user_id, name=name, balance=Decimal("0.00"), allocated=Decimal("0.00"))
            )

    if buckets_to_create:
        db.add_all(buckets_to_create)
        await db.flush()
        logger.info(f"Seeded {len(buckets_to_create)} default buckets for user {user_id}")

    return buckets_to_create
