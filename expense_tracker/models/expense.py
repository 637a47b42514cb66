"""Expense model."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Numeric, String, Text, func
from sqlalchemy.orm import relationship

from expense_tracker.database import Base
from expense_tracker.models.mixins import CreatedAtMixin


class Expense(Base, CreatedAtMixin):
    """A single expense owned by a user."""

    __tablename__ = "expenses"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    category = Column(String(100), nullable=False)  # Free text, e.g. "food", "travel"
    amount = Column(Numeric(10, 2), nullable=False)
    description = Column(Text, nullable=True, default="")
    date = Column(
        DateTime(timezone=True), default=func.now(), server_default=func.now(), nullable=False
    )

    # Relationships
    user = relationship("User", back_populates="expenses")
