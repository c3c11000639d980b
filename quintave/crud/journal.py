# quintave/crud/journal.py
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy import desc
from quintave.core.db_utils import return_default_on_db_error
from quintave.models.journal import JournalEntry
from typing import List, Optional
import uuid
from quintave.schemas.journal import JournalEntryCreate

@return_default_on_db_error(list)
async def get_journal_entries_for_user(user_id: uuid.UUID, db: AsyncSession) -> List[JournalEntry]:
    result = await db.execute(
        select(JournalEntry)
        .where(JournalEntry.user_id == user_id)
        .order_by(desc(JournalEntry.created_at))
    )
    return result.scalars().all()

async def get_journal_entry_by_id(entry_id: uuid.UUID, user_id: uuid.UUID, db: AsyncSession) -> Optional[JournalEntry]:
    result = await db.execute(
        select(JournalEntry).where(JournalEntry.id == entry_id, JournalEntry.user_id == user_id)
    )
    return result.scalar_one_or_none()

async def create_journal_entry_for_user(user_id: uuid.UUID, entry_in: JournalEntryCreate, db: AsyncSession) -> JournalEntry:
    snapshot = None
    if entry_in.financial_snapshot is not None:
        # JSON column: decimals are stored as strings
        snapshot = [item.model_dump(mode="json") for item in entry_in.financial_snapshot]

    new_entry = JournalEntry(user_id=user_id, content=entry_in.content, financial_snapshot=snapshot)
    db.add(new_entry)
    await db.commit()
    await db.refresh(new_entry)
    return new_entry

async def delete_journal_entry(entry: JournalEntry, db: AsyncSession) -> None:
    await db.delete(entry)
    await db.commit()
