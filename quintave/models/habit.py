# quintave/models/habit.py
import uuid
from datetime import datetime
from sqlalchemy import Column, String, Numeric, DateTime, ForeignKey, Boolean, Enum, Uuid
from quintave.core.database import Base
from quintave.models.transaction import TransactionType

class Habit(Base):
    """A recurring transaction template; completing it books a transaction."""
    __tablename__ = "habits"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(length=200), nullable=False)
    frequency = Column(String(length=50), nullable=False)  # daily, weekly, custom
    # Amount spent/earned per completion
    price = Column(Numeric(10, 2), nullable=False)
    bucket_id = Column(Uuid(as_uuid=True), ForeignKey("buckets.id", ondelete="CASCADE"), nullable=False)
    type = Column(Enum(TransactionType, name="transaction_type"), nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow)

    def __repr__(self):
        return f"<Habit name={self.name} price={self.price} type={self.type}>"

class HabitCompletion(Base):
    __tablename__ = "habit_completions"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    habit_id = Column(Uuid(as_uuid=True), ForeignKey("habits.id", ondelete="CASCADE"), nullable=False, index=True)
    completed_at = Column(DateTime, nullable=False)
    # Transaction booked when the habit was completed
    transaction_id = Column(Uuid(as_uuid=True), ForeignKey("transactions.id", ondelete="SET NULL"), nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)

    def __repr__(self):
        return f"<HabitCompletion habit_id={self.habit_id} completed_at={self.completed_at}>"
