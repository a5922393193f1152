"""Store contracts and the plain records they exchange with services."""

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, Protocol


def as_utc(value: datetime | None) -> datetime | None:
    """Attach UTC to naive datetimes (SQLite drops the offset on the way back)."""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=UTC)


@dataclass(frozen=True)
class UserRecord:
    id: int
    username: str
    email: str
    password_hash: str
    is_active: bool
    is_admin: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class CreatorRecord:
    """Public identity of a licitation's creator."""

    id: int
    username: str
    email: str


@dataclass(frozen=True)
class LicitationRecord:
    id: int
    title: str
    description: str
    start_date: datetime
    end_date: datetime
    is_lowest_price: bool
    user_id: int | None
    creator: CreatorRecord | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class UserStore(Protocol):
    def get(self, user_id: int) -> UserRecord | None: ...

    def find_by_email(self, email: str) -> UserRecord | None: ...

    def find_by_username_or_email(self, username: str, email: str) -> UserRecord | None: ...

    def count(self) -> int: ...

    def create(
        self, username: str, email: str, password_hash: str, is_admin: bool = False
    ) -> UserRecord: ...


class LicitationStore(Protocol):
    def list_all(self) -> list[LicitationRecord]: ...

    def get(self, licitation_id: int) -> LicitationRecord | None: ...

    def create(
        self,
        title: str,
        description: str,
        start_date: datetime,
        end_date: datetime,
        is_lowest_price: bool,
        user_id: int | None,
    ) -> LicitationRecord: ...

    def update(self, licitation_id: int, changes: dict[str, Any]) -> LicitationRecord: ...

    def delete(self, licitation_id: int) -> None: ...
