"""Pydantic schemas for request/response validation."""

from strix.schemas.auth import AuthData, UserLogin, UserRegister, UserResponse
from strix.schemas.common import ApiResponse, CamelModel
from strix.schemas.licitation import (
    CreatorResponse,
    LicitationCreate,
    LicitationResponse,
    LicitationUpdate,
)

__all__ = [
    "ApiResponse",
    "CamelModel",
    "AuthData",
    "UserLogin",
    "UserRegister",
    "UserResponse",
    "CreatorResponse",
    "LicitationCreate",
    "LicitationResponse",
    "LicitationUpdate",
]
