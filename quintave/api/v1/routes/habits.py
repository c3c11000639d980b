# quintave/api/v1/routes/habits.py
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
import uuid

from quintave.schemas.habit import (
    HabitCreate,
    HabitRead,
    HabitCompleteRequest,
    HabitCompletionRead,
    HabitHistoryItem,
)
from quintave.crud.habit import (
    create_habit_for_user,
    get_habits_for_user,
    get_habit_by_id,
    delete_habit,
    get_habit_completions,
    get_completion_for_user,
    complete_habit,
    delete_habit_completion,
)
from quintave.crud.bucket import get_bucket_by_id
from quintave.core.database import get_async_session
from quintave.core.auth import User
from quintave.api.deps import require_access

router = APIRouter(prefix="/habits", tags=["habits"])

@router.get("", response_model=List[HabitRead])
async def read_habits(
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(require_access),
):
    return await get_habits_for_user(user.id, db)

@router.post("", response_model=HabitRead, status_code=status.HTTP_201_CREATED)
async def create_habit(
    habit_in: HabitCreate,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(require_access),
):
    if not await get_bucket_by_id(habit_in.bucket_id, user.id, db):
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail="Bucket not found")
    return await create_habit_for_user(user.id, habit_in, db)

@router.post("/{habit_id}/complete", response_model=HabitCompletionRead, status_code=status.HTTP_201_CREATED)
async def complete_habit_endpoint(
    habit_id: uuid.UUID,
    complete_in: HabitCompleteRequest,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(require_access),
):
    """
    Mark a habit as done.

    Books a Planned transaction for the habit's price against its bucket; for
    income habits the price is also spread over all buckets.
    """
    habit = await get_habit_by_id(habit_id, user.id, db)
    if not habit:
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail="Habit not found")
    return await complete_habit(habit, complete_in.completed_at, db)

@router.get("/{habit_id}/completions", response_model=List[HabitCompletionRead])
async def read_habit_completions(
    habit_id: uuid.UUID,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(require_access),
):
    habit = await get_habit_by_id(habit_id, user.id, db)
    if not habit:
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail="Habit not found")
    return await get_habit_completions(habit.id, db)

@router.get("/{habit_id}/history", response_model=List[HabitHistoryItem])
async def read_habit_history(
    habit_id: uuid.UUID,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(require_access),
):
    habit = await get_habit_by_id(habit_id, user.id, db)
    if not habit:
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail="Habit not found")

    completions = await get_habit_completions(habit.id, db)
    # Completions enriched with the habit details
    return [
        HabitHistoryItem(
            id=c.id,
            habit_id=c.habit_id,
            completed_at=c.completed_at,
            transaction_id=c.transaction_id,
            amount=habit.price,
            habit_name=habit.name,
            bucket_id=habit.bucket_id,
            type=habit.type,
        )
        for c in completions
    ]

@router.delete("/completions/{completion_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_habit_completion_endpoint(
    completion_id: uuid.UUID,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(require_access),
):
    completion = await get_completion_for_user(completion_id, user.id, db)
    if not completion:
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail="Habit completion not found")
    await delete_habit_completion(completion, db)
    return None

@router.delete("/{habit_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_habit_endpoint(
    habit_id: uuid.UUID,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(require_access),
):
    habit = await get_habit_by_id(habit_id, user.id, db)
    if not habit:
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail="Habit not found")
    await delete_habit(habit, db)
    return None
