"""Authentication schemas."""

from pydantic import BaseModel, Field


class UserRegister(BaseModel):
    """Registration request schema.

    Field rules are enforced by the auth service so that a taken username is
    reported before any other problem with the request.
    """

    username: str = Field("", description="Letters, digits and underscores, 3-100 chars")
    password: str = Field("", description="At least 6 characters")


class UserLogin(BaseModel):
    """Login request schema."""

    username: str = Field("", description="Username")
    password: str = Field("", description="Password")


class UserPublic(BaseModel):
    """User fields safe to return to clients."""

    id: str
    username: str

    model_config = {"from_attributes": True}


class RegisterResponse(BaseModel):
    message: str = "Registration successful"
    user: UserPublic


class Token(BaseModel):
    """Login response schema."""

    message: str = "Login successful"
    user: UserPublic
    token: str = Field(..., description="JWT access token")
