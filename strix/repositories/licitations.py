"""SQLAlchemy-backed licitation store."""

from datetime import datetime
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from strix.models.licitation import Licitation
from strix.repositories.base import CreatorRecord, LicitationRecord, as_utc
from strix.services.exceptions import NotFoundError, StoreError

# Columns a caller may change after creation; user_id is deliberately absent.
UPDATABLE_FIELDS = frozenset({"title", "description", "start_date", "end_date", "is_lowest_price"})


def _to_record(licitation: Licitation) -> LicitationRecord:
    creator = licitation.creator
    return LicitationRecord(
        id=licitation.id,
        title=licitation.title,
        description=licitation.description,
        start_date=as_utc(licitation.start_date),
        end_date=as_utc(licitation.end_date),
        is_lowest_price=licitation.is_lowest_price,
        user_id=licitation.user_id,
        creator=(
            CreatorRecord(id=creator.id, username=creator.username, email=creator.email)
            if creator
            else None
        ),
        created_at=as_utc(licitation.created_at),
        updated_at=as_utc(licitation.updated_at),
    )


class SQLAlchemyLicitationStore:
    """Licitation persistence over a request-scoped session."""

    def __init__(self, db: Session):
        self.db = db

    def _load(self, licitation_id: int) -> Licitation | None:
        return (
            self.db.query(Licitation)
            .options(joinedload(Licitation.creator))
            .filter(Licitation.id == licitation_id)
            .first()
        )

    def list_all(self) -> list[LicitationRecord]:
        try:
            licitations = (
                self.db.query(Licitation)
                .options(joinedload(Licitation.creator))
                .order_by(Licitation.id)
                .all()
            )
        except SQLAlchemyError as e:
            raise StoreError(str(e)) from e
        return [_to_record(licitation) for licitation in licitations]

    def get(self, licitation_id: int) -> LicitationRecord | None:
        try:
            licitation = self._load(licitation_id)
        except SQLAlchemyError as e:
            raise StoreError(str(e)) from e
        return _to_record(licitation) if licitation else None

    def create(
        self,
        title: str,
        description: str,
        start_date: datetime,
        end_date: datetime,
        is_lowest_price: bool,
        user_id: int | None,
    ) -> LicitationRecord:
        licitation = Licitation(
            title=title,
            description=description,
            start_date=start_date,
            end_date=end_date,
            is_lowest_price=is_lowest_price,
            user_id=user_id,
        )
        try:
            self.db.add(licitation)
            self.db.commit()
            licitation = self._load(licitation.id)
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StoreError(str(e)) from e
        return _to_record(licitation)

    def update(self, licitation_id: int, changes: dict[str, Any]) -> LicitationRecord:
        unknown = set(changes) - UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update fields: {sorted(unknown)}")

        try:
            licitation = self._load(licitation_id)
            if licitation is None:
                raise NotFoundError(f"Licitation with ID {licitation_id} not found")
            for field, value in changes.items():
                setattr(licitation, field, value)
            self.db.commit()
            self.db.refresh(licitation)
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StoreError(str(e)) from e
        return _to_record(licitation)

    def delete(self, licitation_id: int) -> None:
        try:
            deleted = (
                self.db.query(Licitation)
                .filter(Licitation.id == licitation_id)
                .delete(synchronize_session=False)
            )
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StoreError(str(e)) from e
        if not deleted:
            raise NotFoundError(f"Licitation with ID {licitation_id} not found")
