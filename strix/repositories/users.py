"""SQLAlchemy-backed credential store."""

import logging

from sqlalchemy import func, or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from strix.models.user import User
from strix.repositories.base import UserRecord, as_utc
from strix.services.exceptions import ConflictError, StoreError

logger = logging.getLogger(__name__)


def _to_record(user: User) -> UserRecord:
    return UserRecord(
        id=user.id,
        username=user.username,
        email=user.email,
        password_hash=user.password_hash,
        is_active=user.is_active,
        is_admin=user.is_admin,
        created_at=as_utc(user.created_at),
        updated_at=as_utc(user.updated_at),
    )


class SQLAlchemyUserStore:
    """User persistence over a request-scoped session."""

    def __init__(self, db: Session):
        self.db = db

    def get(self, user_id: int) -> UserRecord | None:
        try:
            user = self.db.get(User, user_id)
        except SQLAlchemyError as e:
            raise StoreError(str(e)) from e
        return _to_record(user) if user else None

    def find_by_email(self, email: str) -> UserRecord | None:
        try:
            user = self.db.query(User).filter(User.email == email).first()
        except SQLAlchemyError as e:
            raise StoreError(str(e)) from e
        return _to_record(user) if user else None

    def find_by_username_or_email(self, username: str, email: str) -> UserRecord | None:
        try:
            user = (
                self.db.query(User)
                .filter(or_(User.username == username, User.email == email))
                .first()
            )
        except SQLAlchemyError as e:
            raise StoreError(str(e)) from e
        return _to_record(user) if user else None

    def count(self) -> int:
        try:
            return self.db.query(func.count(User.id)).scalar() or 0
        except SQLAlchemyError as e:
            raise StoreError(str(e)) from e

    def create(
        self, username: str, email: str, password_hash: str, is_admin: bool = False
    ) -> UserRecord:
        user = User(
            username=username,
            email=email,
            password_hash=password_hash,
            is_active=True,
            is_admin=is_admin,
        )
        try:
            self.db.add(user)
            self.db.commit()
            self.db.refresh(user)
        except IntegrityError as e:
            self.db.rollback()
            logger.warning(f"Duplicate user rejected by the database: {username!r}")
            raise ConflictError("User with this username or email already exists") from e
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StoreError(str(e)) from e
        return _to_record(user)
