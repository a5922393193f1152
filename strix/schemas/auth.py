"""Authentication schemas."""

from pydantic import Field

from strix.schemas.common import CamelModel


class UserRegister(CamelModel):
    """User registration request. Presence is checked by the auth service."""

    username: str | None = Field(None, max_length=255)
    email: str | None = Field(None, max_length=255)
    password: str | None = Field(None, max_length=128)


class UserLogin(CamelModel):
    """User login request."""

    email: str | None = Field(None, max_length=255)
    password: str | None = Field(None, max_length=128)


class UserResponse(CamelModel):
    """Public user information."""

    id: int
    username: str
    email: str
    is_admin: bool


class AuthData(CamelModel):
    """Token plus the user it was issued for."""

    token: str
    user: UserResponse
