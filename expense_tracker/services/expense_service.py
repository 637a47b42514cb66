"""Expense repository scoped by owning user."""

import logging
import math
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from sqlalchemy import desc, func
from sqlalchemy.orm import Session

from expense_tracker.exceptions import ValidationError
from expense_tracker.models.expense import Expense

logger = logging.getLogger(__name__)

# NUMERIC(10, 2) holds magnitudes below 10**8
MAX_AMOUNT = 10**8


@dataclass
class CategoryTotal:
    """Aggregate for one category of a user's expenses."""

    category: str
    count: int
    total_amount: Decimal


@dataclass
class ExpenseSummary:
    """Per-category totals plus the grand total for one user."""

    by_category: list[CategoryTotal] = field(default_factory=list)
    grand_total: Decimal = Decimal("0")


def is_missing(value: object) -> bool:
    """True for None or a blank string."""
    return value is None or (isinstance(value, str) and not value.strip())


class ExpenseService:
    """Queries over the expenses table.

    Every operation takes the owning ``user_id`` explicitly so one user's
    rows are never read or changed through another user's id.
    """

    def __init__(self, db: Session):
        self.db = db

    def insert(
        self,
        user_id: int,
        category: str | None,
        amount: float | str | Decimal | None,
        description: str | None = None,
        date: datetime | None = None,
    ) -> int:
        """Insert an expense and return its id."""
        if is_missing(category) or is_missing(amount):
            raise ValidationError("Category and amount are required")
        try:
            amount = float(amount)
        except (TypeError, ValueError):
            raise ValidationError("Amount must be a number") from None
        if not math.isfinite(amount) or abs(amount) >= MAX_AMOUNT:
            raise ValidationError("Amount must be a number")

        values = {
            "user_id": user_id,
            "category": category,
            "amount": amount,
            "description": description or "",
        }
        # Leave date unset so the insert time applies
        if date is not None:
            values["date"] = date

        expense = Expense(**values)
        self.db.add(expense)
        self.db.commit()
        self.db.refresh(expense)
        return expense.id

    def list_by_user(self, user_id: int) -> list[Expense]:
        """List a user's expenses, newest first."""
        return (
            self.db.query(Expense)
            .filter(Expense.user_id == user_id)
            .order_by(Expense.date.desc(), Expense.id.desc())
            .all()
        )

    def summary_by_user(self, user_id: int) -> ExpenseSummary:
        """Total a user's expenses per category, largest total first."""
        total_amount = func.sum(Expense.amount).label("total_amount")
        rows = (
            self.db.query(Expense.category, func.count(Expense.id).label("count"), total_amount)
            .filter(Expense.user_id == user_id)
            .group_by(Expense.category)
            .order_by(desc(total_amount), Expense.category)
            .all()
        )

        grand_total = (
            self.db.query(func.coalesce(func.sum(Expense.amount), 0))
            .filter(Expense.user_id == user_id)
            .scalar()
        )

        return ExpenseSummary(
            by_category=[
                CategoryTotal(category=category, count=count, total_amount=Decimal(str(total)))
                for category, count, total in rows
            ],
            grand_total=Decimal(str(grand_total or 0)),
        )

    def delete_by_user_and_id(self, user_id: int, expense_id: int) -> bool:
        """Delete an expense only if ``user_id`` owns it.

        Returns False both when the id does not exist and when another user
        owns it.
        """
        deleted = (
            self.db.query(Expense)
            .filter(Expense.id == expense_id, Expense.user_id == user_id)
            .delete(synchronize_session=False)
        )
        self.db.commit()
        if deleted:
            logger.info(f"Deleted expense {expense_id} for user {user_id}")
        return deleted > 0
