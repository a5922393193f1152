"""Persistence layer: store contracts and their SQLAlchemy implementations."""

from strix.repositories.base import (
    CreatorRecord,
    LicitationRecord,
    LicitationStore,
    UserRecord,
    UserStore,
)
from strix.repositories.licitations import SQLAlchemyLicitationStore
from strix.repositories.users import SQLAlchemyUserStore

__all__ = [
    "CreatorRecord",
    "LicitationRecord",
    "LicitationStore",
    "UserRecord",
    "UserStore",
    "SQLAlchemyLicitationStore",
    "SQLAlchemyUserStore",
]
