# quintave/api/v1/routes/transactions.py
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
import uuid

from quintave.schemas.transaction import TransactionCreate, TransactionRead
from quintave.crud.transaction import (
    BucketNotFoundError,
    create_transaction_for_user,
    get_transactions_for_user,
    get_transaction_by_id,
    delete_transaction,
)
from quintave.core.database import get_async_session
from quintave.core.auth import User
from quintave.api.deps import require_access

router = APIRouter(prefix="/transactions", tags=["transactions"])

@router.get("", response_model=List[TransactionRead])
async def read_transactions(
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(require_access),
):
    return await get_transactions_for_user(user.id, db)

@router.post("", response_model=TransactionRead, status_code=status.HTTP_201_CREATED)
async def create_transaction(
    tx_in: TransactionCreate,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(require_access),
):
    """
    Record an income or expense.

    - **INCOME**: the amount is split evenly over all of your buckets' allocations
    - **EXPENSE**: the amount comes off the chosen bucket's balance (it may go negative)
    """
    try:
        return await create_transaction_for_user(user.id, tx_in, db)
    except BucketNotFoundError:
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail="Bucket not found")

@router.get("/{transaction_id}", response_model=TransactionRead)
async def read_transaction(
    transaction_id: uuid.UUID,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(require_access),
):
    tx = await get_transaction_by_id(transaction_id, user.id, db)
    if not tx:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Transaction not found")
    return tx

@router.delete("/{transaction_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_transaction_endpoint(
    transaction_id: uuid.UUID,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(require_access),
):
    tx = await get_transaction_by_id(transaction_id, user.id, db)
    if not tx:
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail="Transaction not found")
    await delete_transaction(tx, db)
    return None
