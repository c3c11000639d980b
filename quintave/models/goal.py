# quintave/models/goal.py
import uuid
from decimal import Decimal
from datetime import datetime
from sqlalchemy import Column, String, Numeric, DateTime, ForeignKey, Boolean, Uuid
from quintave.core.database import Base

class Goal(Base):
    __tablename__ = "goals"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    bucket_id = Column(Uuid(as_uuid=True), ForeignKey("buckets.id", ondelete="CASCADE"), nullable=False)
    name = Column(String(length=200), nullable=False)
    target_amount = Column(Numeric(10, 2), nullable=False)
    current_amount = Column(Numeric(10, 2), nullable=False, default=Decimal("0.00"))
    target_date = Column(DateTime, nullable=True)
    is_completed = Column(Boolean, default=False, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f"<Goal name={self.name} target={self.target_amount} user_id={self.user_id}>"
