# quintave/schemas/purchase.py
from pydantic import BaseModel, Field
from datetime import datetime

class PurchaseStatus(BaseModel):
    has_purchased: bool
    trial_active: bool
    trial_days_remaining: int
    trial_ends_at: datetime
    has_access: bool

class PurchaseConfirm(BaseModel):
    revenuecat_app_user_id: str = Field(..., min_length=1, max_length=128)
