# quintave/schemas/transaction.py
from typing import Optional
from pydantic import BaseModel, Field, field_validator
from datetime import datetime
from decimal import Decimal
import uuid

from quintave.models.transaction import TransactionType, SpendingCategory
from quintave.utils.dates import as_naive_utc

class TransactionBase(BaseModel):
    bucket_id: uuid.UUID
    type: TransactionType
    amount: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2)
    category: SpendingCategory
    description: Optional[str] = None
    date: datetime = Field(..., description="ISO 8601 date/time of transaction")
    is_recurring: bool = False
    recurring_frequency: Optional[str] = Field(None, max_length=50)

    @field_validator("date")
    @classmethod
    def normalize_date(cls, v: datetime) -> datetime:
        return as_naive_utc(v)

class TransactionCreate(TransactionBase):
    pass

class TransactionRead(TransactionBase):
    id: uuid.UUID
    user_id: uuid.UUID
    amount: Decimal

    class Config:
        from_attributes = True
