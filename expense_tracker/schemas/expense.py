"""Expense schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from expense_tracker.schemas.common import MessageResponse


class ExpenseCreate(BaseModel):
    """Add an expense for a user."""

    model_config = ConfigDict(populate_by_name=True)

    user_id: int | None = Field(None, alias="userId")
    category: str | None = Field(None, max_length=100)
    amount: float | str | None = None  # Coerced to float by the service
    description: str | None = None
    date: datetime | None = None  # Defaults to insert time


class ExpenseCreateResponse(MessageResponse):
    """Result of adding an expense."""

    id: int


class ExpenseResponse(BaseModel):
    """Expense response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    category: str
    amount: float
    description: str | None
    date: datetime
    created_at: datetime


class CategoryTotalResponse(BaseModel):
    """Count and total for one category."""

    model_config = ConfigDict(from_attributes=True)

    category: str
    count: int
    total_amount: float


class ExpenseSummaryResponse(BaseModel):
    """Per-category totals and grand total for a user."""

    model_config = ConfigDict(from_attributes=True)

    success: bool = True
    by_category: list[CategoryTotalResponse] = Field(
        default_factory=list, serialization_alias="byCategory"
    )
    grand_total: float = Field(0, serialization_alias="grandTotal")
