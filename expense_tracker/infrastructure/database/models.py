"""SQLAlchemy ORM models for the expense record store"""

from sqlalchemy import Column, String, Integer, DateTime, Text
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class ExpenseRow(Base):
    """One expense record; position keeps the record-set order"""

    __tablename__ = "expense"

    id = Column(String(64), primary_key=True)
    position = Column(Integer, nullable=False, index=True)
    person = Column(Text, nullable=False, index=True)
    item = Column(Text, nullable=False)
    # Decimal stored as text so no rounding happens in the database
    cost = Column(Text, nullable=False)
    status = Column(String(16), nullable=False, default="unpaid")
    added_at = Column(DateTime(timezone=True), nullable=False)
    paid_at = Column(DateTime(timezone=True), nullable=True)
    paid_batch_id = Column(String(64), nullable=True, index=True)
