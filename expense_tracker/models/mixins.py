"""Mixins for SQLAlchemy models."""

from sqlalchemy import Column, DateTime, func


class CreatedAtMixin:
    """Mixin to add a created_at column set once at insert."""

    created_at = Column(
        DateTime(timezone=True), default=func.now(), server_default=func.now(), nullable=False
    )
