# quintave/models/transaction.py
import enum
import uuid
from datetime import datetime
from sqlalchemy import Column, String, Text, ForeignKey, Numeric, DateTime, Boolean, Enum, Uuid
from quintave.core.database import Base

class TransactionType(str, enum.Enum):
    INCOME = "INCOME"
    EXPENSE = "EXPENSE"

class SpendingCategory(str, enum.Enum):
    Planned = "Planned"
    Unplanned = "Unplanned"
    Impulse = "Impulse"

class Transaction(Base):
    __tablename__ = "transactions"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    bucket_id = Column(Uuid(as_uuid=True), ForeignKey("buckets.id", ondelete="CASCADE"), nullable=False)
    type = Column(Enum(TransactionType, name="transaction_type"), nullable=False)
    amount = Column(Numeric(10, 2), nullable=False)
    category = Column(Enum(SpendingCategory, name="spending_category"), nullable=False)
    description = Column(Text, nullable=True)
    date = Column(DateTime, nullable=False)
    is_recurring = Column(Boolean, default=False, nullable=False)
    recurring_frequency = Column(String(length=50), nullable=True)  # daily, weekly, monthly

    created_at = Column(DateTime, default=datetime.utcnow)

    def __repr__(self):
        return f"<Transaction type={self.type} amount={self.amount} date={self.date} user_id={self.user_id}>"
