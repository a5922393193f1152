"""Authentication API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from strix.api.dependencies import get_auth_service, get_current_user
from strix.schemas.auth import AuthData, UserLogin, UserRegister, UserResponse
from strix.schemas.common import ApiResponse
from strix.services.auth import AuthService, CurrentUser

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post(
    "/register",
    response_model=ApiResponse[AuthData],
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
def register(
    user_data: UserRegister,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
):
    """Register a new user. The first user ever registered becomes an admin."""
    token, user = auth_service.register(user_data.username, user_data.email, user_data.password)

    return ApiResponse[AuthData](
        message="User registered successfully",
        data=AuthData(token=token, user=UserResponse.model_validate(user)),
    )


@router.post("/login", response_model=ApiResponse[AuthData], response_model_exclude_none=True)
def login(
    credentials: UserLogin,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
):
    """Login with email and password."""
    token, user = auth_service.login(credentials.email, credentials.password)

    return ApiResponse[AuthData](
        message="Login successful",
        data=AuthData(token=token, user=UserResponse.model_validate(user)),
    )


@router.get("/me", response_model=ApiResponse[UserResponse], response_model_exclude_none=True)
def get_me(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
):
    """Get current user information."""
    return ApiResponse[UserResponse](data=UserResponse.model_validate(current_user))
