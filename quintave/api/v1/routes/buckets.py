# quintave/api/v1/routes/buckets.py
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
import uuid

from quintave.schemas.bucket import BucketCreate, BucketRead, BucketBalanceUpdate, BucketsOverview
from quintave.crud.bucket import (
    BucketLimitError,
    create_bucket_for_user,
    get_buckets_for_user,
    get_bucket_by_id,
    update_bucket_balance,
)
from quintave.crud.transaction import get_transactions_for_user
from quintave.core.database import get_async_session
from quintave.core.auth import User
from quintave.api.deps import require_access
from quintave.utils.budgeting import summarize_buckets

router = APIRouter(prefix="/buckets", tags=["buckets"])

@router.get("", response_model=List[BucketRead])
async def read_buckets(
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(require_access),
):
    return await get_buckets_for_user(user.id, db)

@router.get("/summary", response_model=BucketsOverview)
async def read_buckets_summary(
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(require_access),
):
    """
    Buckets with their derived figures:

    - **spent**: sum of the bucket's expenses
    - **remaining**: allocated minus spent
    - **is_overspent** / **debt**: how far spending went past the allocation
    """
    buckets = await get_buckets_for_user(user.id, db)
    transactions = await get_transactions_for_user(user.id, db)
    return summarize_buckets(buckets, transactions)

@router.post("", response_model=BucketRead, status_code=status.HTTP_201_CREATED)
async def create_bucket(
    bucket_in: BucketCreate,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(require_access),
):
    try:
        return await create_bucket_for_user(user.id, bucket_in, db)
    except BucketLimitError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

@router.get("/{bucket_id}", response_model=BucketRead)
async def read_bucket(
    bucket_id: uuid.UUID,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(require_access),
):
    bucket = await get_bucket_by_id(bucket_id, user.id, db)
    if not bucket:
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail="Bucket not found")
    return bucket

@router.patch("/{bucket_id}/balance", response_model=BucketRead)
async def update_bucket_balance_endpoint(
    bucket_id: uuid.UUID,
    balance_in: BucketBalanceUpdate,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(require_access),
):
    bucket = await get_bucket_by_id(bucket_id, user.id, db)
    if not bucket:
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail="Bucket not found")
    return await update_bucket_balance(bucket, balance_in.new_balance, db)
