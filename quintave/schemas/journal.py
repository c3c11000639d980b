# quintave/schemas/journal.py
from typing import List, Optional
from pydantic import BaseModel, Field
from datetime import datetime
from decimal import Decimal
import uuid

class BucketSnapshot(BaseModel):
    bucket_name: str = Field(..., min_length=1, max_length=100)
    balance: Decimal = Field(..., max_digits=12, decimal_places=2)

class JournalEntryCreate(BaseModel):
    content: str = Field(..., min_length=1)
    financial_snapshot: Optional[List[BucketSnapshot]] = None

class JournalEntryRead(BaseModel):
    id: uuid.UUID
    user_id: uuid.UUID
    content: str
    financial_snapshot: Optional[List[BucketSnapshot]] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
