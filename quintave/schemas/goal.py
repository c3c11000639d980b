# quintave/schemas/goal.py
from typing import Optional
from pydantic import BaseModel, Field, field_validator
from datetime import datetime
from decimal import Decimal
import uuid

from quintave.utils.dates import as_naive_utc

class GoalCreate(BaseModel):
    bucket_id: uuid.UUID
    name: str = Field(..., min_length=1, max_length=200)
    target_amount: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2)
    current_amount: Decimal = Field(Decimal("0.00"), ge=0, max_digits=10, decimal_places=2)
    target_date: Optional[datetime] = None

    @field_validator("target_date")
    @classmethod
    def normalize_target_date(cls, v: Optional[datetime]) -> Optional[datetime]:
        return as_naive_utc(v)

class GoalProgressUpdate(BaseModel):
    current_amount: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)

class GoalRead(BaseModel):
    id: uuid.UUID
    user_id: uuid.UUID
    bucket_id: uuid.UUID
    name: str
    target_amount: Decimal
    current_amount: Decimal
    target_date: Optional[datetime] = None
    is_completed: bool
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
