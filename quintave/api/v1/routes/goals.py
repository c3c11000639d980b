# quintave/api/v1/routes/goals.py
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
import uuid

from quintave.schemas.goal import GoalCreate, GoalRead, GoalProgressUpdate
from quintave.crud.goal import (
    create_goal_for_user,
    get_goals_for_user,
    get_goal_by_id,
    update_goal_progress,
    delete_goal,
)
from quintave.crud.bucket import get_bucket_by_id
from quintave.core.database import get_async_session
from quintave.core.auth import User
from quintave.api.deps import require_access

router = APIRouter(prefix="/goals", tags=["goals"])

@router.get("", response_model=List[GoalRead])
async def read_goals(
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(require_access),
):
    return await get_goals_for_user(user.id, db)

@router.post("", response_model=GoalRead, status_code=status.HTTP_201_CREATED)
async def create_goal(
    goal_in: GoalCreate,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(require_access),
):
    if not await get_bucket_by_id(goal_in.bucket_id, user.id, db):
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail="Bucket not found")
    return await create_goal_for_user(user.id, goal_in, db)

@router.patch("/{goal_id}/progress", response_model=GoalRead)
async def update_goal_progress_endpoint(
    goal_id: uuid.UUID,
    progress_in: GoalProgressUpdate,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(require_access),
):
    """
    Set how much has been saved towards the goal.

    - **current_amount**: the new saved amount; the goal is completed once it reaches the target
    """
    goal = await get_goal_by_id(goal_id, user.id, db)
    if not goal:
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail="Goal not found")
    return await update_goal_progress(goal, progress_in.current_amount, db)

@router.delete("/{goal_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_goal_endpoint(
    goal_id: uuid.UUID,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(require_access),
):
    goal = await get_goal_by_id(goal_id, user.id, db)
    if not goal:
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail="Goal not found")
    await delete_goal(goal, db)
    return None
