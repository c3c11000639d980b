# quintave/core/auth.py

import uuid
import logging
from datetime import datetime
from typing import Optional

from fastapi_users.authentication import JWTStrategy

from sqlalchemy import Column, String, Boolean, DateTime, Uuid

from .database import Base
from .config import settings

# Set up logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

SESSION_TOKEN_AUDIENCE = ["fastapi-users:auth"]

# 1. User DB model
class User(Base):
    __tablename__ = "users"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    # Google account subject ("open id"); every login goes through Google
    google_id = Column(String(length=64), unique=True, index=True, nullable=True)
    email = Column(String(length=320), index=True, nullable=True)
    hashed_password = Column(String, nullable=False, default="")
    is_active = Column(Boolean, default=True, nullable=False)
    is_superuser = Column(Boolean, default=False, nullable=False)
    is_verified = Column(Boolean, default=False, nullable=False)

    full_name = Column(String, nullable=True)
    login_method = Column(String(length=64), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    last_signed_in = Column(DateTime, default=datetime.utcnow, nullable=False)
    has_completed_onboarding = Column(Boolean, default=False, nullable=False)

    # One-time purchase tracking; has_purchased only ever goes False -> True
    has_purchased = Column(Boolean, default=False, nullable=False)
    purchased_at = Column(DateTime, nullable=True)
    revenuecat_app_user_id = Column(String(length=128), index=True, nullable=True)

    def __repr__(self):
        return f"<User id={self.id} email={self.email}>"

# 2. Session tokens
def get_jwt_strategy() -> JWTStrategy:
    return JWTStrategy(
        secret=settings.SECRET_KEY,
        lifetime_seconds=settings.SESSION_TTL_SECONDS,
        token_audience=SESSION_TOKEN_AUDIENCE,
        algorithm=settings.ALGORITHM,
    )

async def create_session_token(user: User, strategy: Optional[JWTStrategy] = None) -> str:
    """Mint the JWT stored in the session cookie (or sent as a Bearer token by native clients)"""
    strategy = strategy or get_jwt_strategy()
    token = await strategy.write_token(user)
    logger.info(f"Session token issued for user {user.id}")
    return token

# Export for other modules
__all__ = [
    "User",
    "SESSION_TOKEN_AUDIENCE",
    "get_jwt_strategy",
    "create_session_token",
]
