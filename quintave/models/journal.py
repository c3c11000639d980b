# quintave/models/journal.py
import uuid
from datetime import datetime
from sqlalchemy import Column, Text, DateTime, ForeignKey, JSON, Uuid
from quintave.core.database import Base

class JournalEntry(Base):
    __tablename__ = "journal_entries"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    content = Column(Text, nullable=False)
    # List of {"bucket_name": str, "balance": "12.34"}; validated by the schema layer
    financial_snapshot = Column(JSON, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)

    def __repr__(self):
        return f"<JournalEntry user_id={self.user_id} created_at={self.created_at}>"
