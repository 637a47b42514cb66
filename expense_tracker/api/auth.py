"""Authentication API endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from expense_tracker.database import get_db
from expense_tracker.exceptions import AuthError, StoreError, ValidationError
from expense_tracker.schemas.auth import (
    LoginResponse,
    RegisterResponse,
    UserLogin,
    UserRegister,
    UserResponse,
)
from expense_tracker.services.auth import (
    MIN_PASSWORD_LENGTH,
    authenticate_user,
    create_user,
    get_user_by_username_or_email,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])

DUPLICATE_USER_MESSAGE = "Username or email already exists"
INVALID_CREDENTIALS_MESSAGE = "Invalid username or password"


@router.post("/register", response_model=RegisterResponse)
def register(
    user_data: UserRegister,
    db: Annotated[Session, Depends(get_db)],
):
    """Register a new user."""
    if not (user_data.username and user_data.email and user_data.password):
        raise ValidationError("Username, email and password are required")
    if len(user_data.password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
        )

    logger.info(f"Registration attempt: {user_data.username} <{user_data.email}>")

    try:
        # Check if user already exists
        if get_user_by_username_or_email(db, user_data.username, user_data.email):
            raise ValidationError(DUPLICATE_USER_MESSAGE)

        user = create_user(db, user_data.username, user_data.email, user_data.password)
    except IntegrityError:
        # Lost the race against a concurrent registration; the unique constraint caught it
        db.rollback()
        raise ValidationError(DUPLICATE_USER_MESSAGE) from None
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Registration failed")
        raise StoreError("Registration failed. Please try again.") from None

    logger.info(f"New user registered: {user.username} (id={user.id})")

    return RegisterResponse(
        message="Registration successful! You can now login.",
        user_id=user.id,
    )


@router.post("/login", response_model=LoginResponse)
def login(
    credentials: UserLogin,
    db: Annotated[Session, Depends(get_db)],
):
    """Login with username and password."""
    if not (credentials.username and credentials.password):
        raise ValidationError("Username and password are required")

    logger.info(f"Login attempt for user: {credentials.username}")

    try:
        user = authenticate_user(db, credentials.username, credentials.password)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Login failed")
        raise StoreError("Login failed. Please try again.") from None

    if not user:
        raise AuthError(INVALID_CREDENTIALS_MESSAGE)

    logger.info(f"User logged in: {user.username}")

    return LoginResponse(
        message="Login successful!",
        user=UserResponse.model_validate(user),
    )
