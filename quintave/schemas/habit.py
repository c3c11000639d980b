# quintave/schemas/habit.py
from typing import Optional
from pydantic import BaseModel, Field, field_validator
from datetime import datetime
from decimal import Decimal
import uuid

from quintave.models.transaction import TransactionType
from quintave.utils.dates import as_naive_utc

class HabitCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    frequency: str = Field(..., max_length=50, description="daily, weekly, custom")
    price: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2)
    bucket_id: uuid.UUID
    type: TransactionType

class HabitRead(BaseModel):
    id: uuid.UUID
    user_id: uuid.UUID
    name: str
    frequency: str
    price: Decimal
    bucket_id: uuid.UUID
    type: TransactionType
    is_active: bool

    class Config:
        from_attributes = True

class HabitCompleteRequest(BaseModel):
    completed_at: datetime

    @field_validator("completed_at")
    @classmethod
    def normalize_completed_at(cls, v: datetime) -> datetime:
        return as_naive_utc(v)

class HabitCompletionRead(BaseModel):
    id: uuid.UUID
    habit_id: uuid.UUID
    completed_at: datetime
    transaction_id: Optional[uuid.UUID] = None

    class Config:
        from_attributes = True

class HabitHistoryItem(HabitCompletionRead):
    amount: Decimal
    habit_name: str
    bucket_id: uuid.UUID
    type: TransactionType
