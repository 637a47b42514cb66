"""User model."""

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from expense_tracker.database import Base
from expense_tracker.models.mixins import CreatedAtMixin


class User(Base, CreatedAtMixin):
    """User model for authentication and expense ownership."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(50), unique=True, nullable=False, index=True)
    email = Column(String(100), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)

    # Relationships
    expenses = relationship(
        "Expense",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
