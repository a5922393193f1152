"""FastAPI dependencies for authentication, stores and services."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from strix.config import Settings, get_settings
from strix.database import get_db
from strix.repositories import SQLAlchemyLicitationStore, SQLAlchemyUserStore
from strix.services.auth import AuthGate, AuthService, CurrentUser, TokenService
from strix.services.licitation_service import LicitationService

# auto_error is off so the gate itself decides between 401 and 403.
security = HTTPBearer(auto_error=False)


def get_token_service(settings: Annotated[Settings, Depends(get_settings)]) -> TokenService:
    """Get token service configured from settings."""
    return TokenService(
        secret=settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        expiration=settings.token_lifetime,
    )


def get_user_store(db: Annotated[Session, Depends(get_db)]) -> SQLAlchemyUserStore:
    return SQLAlchemyUserStore(db)


def get_auth_gate(
    users: Annotated[SQLAlchemyUserStore, Depends(get_user_store)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> AuthGate:
    return AuthGate(users, tokens)


def get_auth_service(
    users: Annotated[SQLAlchemyUserStore, Depends(get_user_store)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> AuthService:
    """Get auth service with dependencies."""
    return AuthService(users, tokens)


def get_licitation_service(db: Annotated[Session, Depends(get_db)]) -> LicitationService:
    """Get licitation service with dependencies."""
    return LicitationService(SQLAlchemyLicitationStore(db))


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    gate: Annotated[AuthGate, Depends(get_auth_gate)],
) -> CurrentUser:
    """Get the current authenticated user from the bearer token.

    A header with another scheme, or with no token after `Bearer`, counts as
    no token at all (401).
    """
    authorization = f"Bearer {credentials.credentials}" if credentials else None
    return gate.authenticate(authorization)
