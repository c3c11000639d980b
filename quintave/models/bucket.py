# quintave/models/bucket.py
import uuid
from decimal import Decimal
from datetime import datetime
from sqlalchemy import Column, String, ForeignKey, Numeric, DateTime, Uuid
from quintave.core.database import Base

class Bucket(Base):
    __tablename__ = "buckets"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(length=100), nullable=False)
    # Spendable remainder; goes negative when the bucket is overspent
    balance = Column(Numeric(10, 2), nullable=False, default=Decimal("0.00"))
    # Cumulative share of income credited to this bucket
    allocated = Column(Numeric(10, 2), nullable=False, default=Decimal("0.00"))

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f"<Bucket name={self.name} balance={self.balance} allocated={self.allocated} user_id={self.user_id}>"
