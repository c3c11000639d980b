# quintave/crud/transaction.py
import logging
from datetime import datetime
from decimal import Decimal
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy import desc
from typing import List, Optional
import uuid

from quintave.core.db_utils import return_default_on_db_error
from quintave.crud.bucket import lock_bucket, lock_buckets_for_user
from quintave.models.transaction import Transaction, TransactionType
from quintave.schemas.transaction import TransactionCreate
from quintave.utils.budgeting import apply_expense, apply_income

logger = logging.getLogger(__name__)


class BucketNotFoundError(LookupError):
    pass


@return_default_on_db_error(list)
async def get_transactions_for_user(user_id: uuid.UUID, db: AsyncSession) -> List[Transaction]:
    result = await db.execute(
        select(Transaction)
        .where(Transaction.user_id == user_id)
        .order_by(desc(Transaction.date))
    )
    return result.scalars().all()

async def get_transactions_since(user_id: uuid.UUID, since: datetime, db: AsyncSession) -> List[Transaction]:
    result = await db.execute(
        select(Transaction)
        .where(Transaction.user_id == user_id, Transaction.date >= since)
        .order_by(Transaction.date)
    )
    return result.scalars().all()

async def get_transaction_by_id(transaction_id: uuid.UUID, user_id: uuid.UUID, db: AsyncSession) -> Optional[Transaction]:
    result = await db.execute(
        select(Transaction).where(Transaction.id == transaction_id, Transaction.user_id == user_id)
    )
    return result.scalar_one_or_none()

async def allocate_income(user_id: uuid.UUID, amount: Decimal, db: AsyncSession) -> Decimal:
    """Spread an income amount evenly over all of the user's buckets. Does not commit."""
    buckets = await lock_buckets_for_user(user_id, db)
    share = apply_income(buckets, amount)
    logger.info(f"Allocated {amount} across {len(buckets)} buckets ({share} each) for user {user_id}")
    return share

async def create_transaction_for_user(user_id: uuid.UUID, tx_in: TransactionCreate, db: AsyncSession) -> Transaction:
    """
    Record a transaction and apply it to the buckets in one database transaction:
    income fans out over every bucket's `allocated`, an expense comes off the
    chosen bucket's `balance`.
    """
    try:
        # Ownership check and row lock on the booked bucket
        bucket = await lock_bucket(tx_in.bucket_id, user_id, db)
        if bucket is None:
            raise BucketNotFoundError(f"Bucket {tx_in.bucket_id} not found")

        new_tx = Transaction(**tx_in.model_dump(), user_id=user_id)
        db.add(new_tx)

        if tx_in.type == TransactionType.INCOME:
            await allocate_income(user_id, tx_in.amount, db)
        else:
            apply_expense(bucket, tx_in.amount)

        await db.commit()
    except Exception:
        await db.rollback()
        raise
    await db.refresh(new_tx)
    return new_tx

async def delete_transaction(tx: Transaction, db: AsyncSession) -> None:
    # Bucket figures are left as they are; deletion only removes the record
    await db.delete(tx)
    await db.commit()
