# quintave/schemas/user.py
from typing import Optional
from datetime import datetime
from pydantic import BaseModel
import uuid

# Public fields returned on GET /auth/me
class UserRead(BaseModel):
    id: uuid.UUID
    email: Optional[str] = None
    full_name: Optional[str] = None
    login_method: Optional[str] = None
    is_active: bool
    has_completed_onboarding: bool
    has_purchased: bool
    purchased_at: Optional[datetime] = None
    created_at: datetime

    class Config:
        from_attributes = True
