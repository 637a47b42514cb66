"""FastAPI dependencies for database-backed services."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from expense_tracker.database import get_db
from expense_tracker.services.expense_service import ExpenseService


def get_expense_service(
    db: Annotated[Session, Depends(get_db)],
) -> ExpenseService:
    """Get expense service bound to the request's session."""
    return ExpenseService(db)
