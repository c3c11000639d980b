# quintave/api/v1/routes/journal.py
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
import uuid

from quintave.schemas.journal import JournalEntryCreate, JournalEntryRead
from quintave.crud.journal import (
    create_journal_entry_for_user,
    get_journal_entries_for_user,
    get_journal_entry_by_id,
    delete_journal_entry,
)
from quintave.core.database import get_async_session
from quintave.core.auth import User
from quintave.api.deps import require_access

router = APIRouter(prefix="/journal", tags=["journal"])

@router.get("", response_model=List[JournalEntryRead])
async def read_journal_entries(
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(require_access),
):
    return await get_journal_entries_for_user(user.id, db)

@router.post("", response_model=JournalEntryRead, status_code=status.HTTP_201_CREATED)
async def create_journal_entry(
    entry_in: JournalEntryCreate,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(require_access),
):
    return await create_journal_entry_for_user(user.id, entry_in, db)

@router.delete("/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_journal_entry_endpoint(
    entry_id: uuid.UUID,
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(require_access),
):
    entry = await get_journal_entry_by_id(entry_id, user.id, db)
    if not entry:
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail="Journal entry not found")
    await delete_journal_entry(entry, db)
    return None
