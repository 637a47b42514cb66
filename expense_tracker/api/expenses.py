"""Expense API endpoints.

Expenses are addressed by the owner's id from the URL or body. No caller
identity is checked against that id.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError

from expense_tracker.api.dependencies import get_expense_service
from expense_tracker.exceptions import NotFoundError, StoreError, ValidationError
from expense_tracker.schemas.common import MessageResponse
from expense_tracker.schemas.expense import (
    ExpenseCreate,
    ExpenseCreateResponse,
    ExpenseResponse,
    ExpenseSummaryResponse,
)
from expense_tracker.services.expense_service import ExpenseService, is_missing

logger = logging.getLogger(__name__)

router = APIRouter(tags=["expenses"])


@router.post("/add-expense", response_model=ExpenseCreateResponse)
def add_expense(
    expense_data: ExpenseCreate,
    service: Annotated[ExpenseService, Depends(get_expense_service)],
):
    """Add an expense for a user."""
    if (
        expense_data.user_id is None
        or is_missing(expense_data.category)
        or is_missing(expense_data.amount)
    ):
        raise ValidationError("User ID, category and amount are required")

    logger.info(
        f"Adding expense for user {expense_data.user_id}: "
        f"{expense_data.category} {expense_data.amount}"
    )

    try:
        expense_id = service.insert(
            expense_data.user_id,
            expense_data.category,
            expense_data.amount,
            description=expense_data.description,
            date=expense_data.date,
        )
    except SQLAlchemyError as e:
        service.db.rollback()
        logger.exception("Add expense failed")
        raise StoreError(f"Failed to add expense: {e.__class__.__name__}") from None

    logger.info(f"Expense added, id={expense_id}")

    return ExpenseCreateResponse(message="Expense added successfully!", id=expense_id)


@router.get("/expenses/summary/{user_id}", response_model=ExpenseSummaryResponse)
def get_expense_summary(
    user_id: int,
    service: Annotated[ExpenseService, Depends(get_expense_service)],
):
    """Get a user's totals per category and overall."""
    try:
        summary = service.summary_by_user(user_id)
    except SQLAlchemyError as e:
        service.db.rollback()
        logger.exception("Summary failed")
        raise StoreError(f"Failed to fetch summary: {e.__class__.__name__}") from None

    logger.info(f"Summary loaded for user {user_id}")
    return ExpenseSummaryResponse.model_validate(summary)


@router.get("/expenses/{user_id}", response_model=list[ExpenseResponse])
def list_expenses(
    user_id: int,
    service: Annotated[ExpenseService, Depends(get_expense_service)],
):
    """List a user's expenses, newest first."""
    try:
        expenses = service.list_by_user(user_id)
    except SQLAlchemyError as e:
        service.db.rollback()
        logger.exception("Get expenses failed")
        raise StoreError(f"Failed to fetch expenses: {e.__class__.__name__}") from None

    logger.info(f"Found {len(expenses)} expenses for user {user_id}")
    return expenses


@router.delete("/expenses/{user_id}/{expense_id}", response_model=MessageResponse)
def delete_expense(
    user_id: int,
    expense_id: int,
    service: Annotated[ExpenseService, Depends(get_expense_service)],
):
    """Delete one of a user's expenses."""
    try:
        deleted = service.delete_by_user_and_id(user_id, expense_id)
    except SQLAlchemyError as e:
        service.db.rollback()
        logger.exception("Delete expense failed")
        raise StoreError(f"Failed to delete expense: {e.__class__.__name__}") from None

    if not deleted:
        raise NotFoundError("Expense not found")

    return MessageResponse(message="Expense deleted successfully")
