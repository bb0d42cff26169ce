"""Transaction model."""

from datetime import UTC, datetime

from sqlalchemy import Column, DateTime, Float, Integer, String

from pocketbook.database import Base


class Transaction(Base):
    """A single money movement recorded by a user."""

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(255), nullable=False, index=True)
    type = Column(String(255), nullable=False, index=True)  # Category.type, matched by value
    amount = Column(Float, nullable=False)
    date = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(UTC))
