# quintave/crud/habit.py
import logging
from datetime import datetime
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy import delete, desc
from typing import List, Optional
import uuid

from quintave.core.db_utils import return_default_on_db_error
from quintave.crud.transaction import allocate_income
from quintave.models.habit import Habit, HabitCompletion
from quintave.models.transaction import Transaction, TransactionType, SpendingCategory
from quintave.schemas.habit import HabitCreate

logger = logging.getLogger(__name__)


@return_default_on_db_error(list)
async def get_habits_for_user(user_id: uuid.UUID, db: AsyncSession) -> List[Habit]:
    result = await db.execute(
        select(Habit).where(Habit.user_id == user_id).order_by(Habit.created_at)
    )
    return result.scalars().all()

async def get_habit_by_id(habit_id: uuid.UUID, user_id: uuid.UUID, db: AsyncSession) -> Optional[Habit]:
    result = await db.execute(
        select(Habit).where(Habit.id == habit_id, Habit.user_id == user_id)
    )
    return result.scalar_one_or_none()

async def create_habit_for_user(user_id: uuid.UUID, habit_in: HabitCreate, db: AsyncSession) -> Habit:
    new_habit = Habit(**habit_in.model_dump(), user_id=user_id)
    db.add(new_habit)
    await db.commit()
    await db.refresh(new_habit)
    return new_habit

async def delete_habit(habit: Habit, db: AsyncSession) -> None:
    """Remove a habit and its completion records; the transactions it booked stay."""
    try:
        await db.execute(delete(HabitCompletion).where(HabitCompletion.habit_id == habit.id))
        await db.delete(habit)
        await db.commit()
    except Exception:
        await db.rollback()
        raise

async def get_habit_completions(habit_id: uuid.UUID, db: AsyncSession) -> List[HabitCompletion]:
    result = await db.execute(
        select(HabitCompletion)
        .where(HabitCompletion.habit_id == habit_id)
        .order_by(desc(HabitCompletion.completed_at))
    )
    return result.scalars().all()

async def get_completion_for_user(completion_id: uuid.UUID, user_id: uuid.UUID, db: AsyncSession) -> Optional[HabitCompletion]:
    result = await db.execute(
        select(HabitCompletion)
        .join(Habit, Habit.id == HabitCompletion.habit_id)
        .where(HabitCompletion.id == completion_id, Habit.user_id == user_id)
    )
    return result.scalar_one_or_none()

async def complete_habit(habit: Habit, completed_at: datetime, db: AsyncSession) -> HabitCompletion:
    """
    Book the habit's transaction, record the completion pointing at it and,
    for income habits, spread the price over the user's buckets. All of it
    commits together or not at all.
    """
    try:
        tx = Transaction(
            user_id=habit.user_id,
            bucket_id=habit.bucket_id,
            type=habit.type,
            amount=habit.price,
            category=SpendingCategory.Planned,
            description=f"{habit.name} (Habit)",
            date=completed_at,
            is_recurring=False,
        )
        db.add(tx)
        # Need the transaction id for the completion row
        await db.flush()

        completion = HabitCompletion(
            habit_id=habit.id,
            completed_at=completed_at,
            transaction_id=tx.id,
        )
        db.add(completion)

        if habit.type == TransactionType.INCOME:
            await allocate_income(habit.user_id, habit.price, db)

        await db.commit()
    except Exception:
        await db.rollback()
        raise
    await db.refresh(completion)
    logger.info(f"Habit {habit.id} completed at {completed_at} (transaction {tx.id})")
    return completion

async def delete_habit_completion(completion: HabitCompletion, db: AsyncSession) -> None:
    """Delete the transaction the completion booked, then the completion itself."""
    try:
        if completion.transaction_id:
            await db.execute(delete(Transaction).where(Transaction.id == completion.transaction_id))
        await db.delete(completion)
        await db.commit()
    except Exception:
        await db.rollback()
        raise
