"""Authentication schemas."""

from pydantic import BaseModel, ConfigDict, Field

from expense_tracker.schemas.common import MessageResponse


class UserRegister(BaseModel):
    """User registration request.

    Fields are optional here so that missing ones produce the same message
    the route uses for blank ones.
    """

    username: str | None = Field(None, max_length=50)
    email: str | None = Field(None, max_length=100)
    password: str | None = None


class UserLogin(BaseModel):
    """User login request."""

    username: str | None = None
    password: str | None = None


class UserResponse(BaseModel):
    """User information response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: str


class RegisterResponse(MessageResponse):
    """Registration result with the new user's id."""

    user_id: int = Field(..., serialization_alias="userId")


class LoginResponse(MessageResponse):
    """Login result with user info (no token is issued)."""

    user: UserResponse
