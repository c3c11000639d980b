# quintave/schemas/bucket.py
from typing import List
from pydantic import BaseModel, Field
from decimal import Decimal
import uuid

class BucketCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    balance: Decimal = Field(Decimal("0.00"), max_digits=10, decimal_places=2)

class BucketBalanceUpdate(BaseModel):
    new_balance: Decimal = Field(..., max_digits=10, decimal_places=2)

class BucketRead(BaseModel):
    id: uuid.UUID
    user_id: uuid.UUID
    name: str
    balance: Decimal
    allocated: Decimal

    class Config:
        from_attributes = True

class BucketSummary(BucketRead):
    """Bucket with the figures derived from its transactions."""
    spent: Decimal
    remaining: Decimal
    percent_used: float
    is_overspent: bool
    debt: Decimal

class BucketsOverview(BaseModel):
    buckets: List[BucketSummary]
    total_debt: Decimal
