# quintave/crud/goal.py
from decimal import Decimal
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy import desc
from quintave.core.db_utils import return_default_on_db_error
from quintave.models.goal import Goal
from typing import List, Optional
import uuid
from quintave.schemas.goal import GoalCreate

@return_default_on_db_error(list)
async def get_goals_for_user(user_id: uuid.UUID, db: AsyncSession) -> List[Goal]:
    result = await db.execute(
        select(Goal).where(Goal.user_id == user_id).order_by(desc(Goal.created_at))
    )
    return result.scalars().all()

async def get_goal_by_id(goal_id: uuid.UUID, user_id: uuid.UUID, db: AsyncSession) -> Optional[Goal]:
    result = await db.execute(
        select(Goal).where(Goal.id == goal_id, Goal.user_id == user_id)
    )
    return result.scalar_one_or_none()

async def create_goal_for_user(user_id: uuid.UUID, goal_in: GoalCreate, db: AsyncSession) -> Goal:
    new_goal = Goal(**goal_in.model_dump(), user_id=user_id)
    new_goal.is_completed = goal_in.current_amount >= goal_in.target_amount
    db.add(new_goal)
    await db.commit()
    await db.refresh(new_goal)
    return new_goal

async def update_goal_progress(goal: Goal, current_amount: Decimal, db: AsyncSession) -> Goal:
    goal.current_amount = current_amount
    goal.is_completed = current_amount >= goal.target_amount
    db.add(goal)
    await db.commit()
    await db.refresh(goal)
    return goal

async def delete_goal(goal: Goal, db: AsyncSession) -> None:
    await db.delete(goal)
    await db.commit()
