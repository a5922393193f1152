"""Licitation service: validation, ownership checks and CRUD."""

import logging
from dataclasses import dataclass
from datetime import UTC, date, datetime
from typing import Any

from strix.repositories.base import LicitationRecord, LicitationStore
from strix.services.exceptions import BadRequestError, ForbiddenError, NotFoundError

logger = logging.getLogger(__name__)


def parse_date(value: Any) -> datetime | None:
    """Parse an ISO-8601 date or datetime; None when it cannot be parsed.

    Naive values are taken as UTC and aware ones are converted to UTC, so
    every stored bound compares on the same clock.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.strip())
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    try:
        return parsed.astimezone(UTC)
    except OverflowError:
        # Offset pushes the instant outside datetime's year range
        return None


@dataclass
class LicitationFields:
    """Client-supplied licitation fields; None means "not supplied"."""

    title: str | None = None
    description: str | None = None
    start_date: Any = None
    end_date: Any = None
    is_lowest_price: bool | None = None


class LicitationService:
    """CRUD over licitations for an already-resolved caller."""

    def __init__(self, store: LicitationStore):
        self.store = store

    def list_all(self) -> list[LicitationRecord]:
        """Every licitation, with its creator's public identity."""
        return self.store.list_all()

    def get_by_id(self, licitation_id: int) -> LicitationRecord:
        licitation = self.store.get(licitation_id)
        if licitation is None:
            raise NotFoundError(f"Licitation with ID {licitation_id} not found")
        return licitation

    def create(self, current_user_id: int | None, fields: LicitationFields) -> LicitationRecord:
        required = (fields.title, fields.description, fields.start_date, fields.end_date)
        if not all(required):
            raise BadRequestError(
                "Missing required fields: title, description, startDate, endDate"
            )

        start = parse_date(fields.start_date)
        if start is None:
            raise BadRequestError("Invalid start date")
        end = parse_date(fields.end_date)
        if end is None:
            raise BadRequestError("Invalid end date")
        if end <= start:
            raise BadRequestError("End date must be after start date")

        licitation = self.store.create(
            title=fields.title,
            description=fields.description,
            start_date=start,
            end_date=end,
            is_lowest_price=True if fields.is_lowest_price is None else fields.is_lowest_price,
            user_id=current_user_id,
        )
        logger.info(f"Licitation {licitation.id} created by user {current_user_id}")
        return licitation

    def _get_owned(
        self, current_user_id: int, is_admin_caller: bool, licitation_id: int, action: str
    ) -> LicitationRecord:
        licitation = self.get_by_id(licitation_id)
        if licitation.user_id != current_user_id and not is_admin_caller:
            logger.warning(
                f"User {current_user_id} denied {action} of licitation {licitation_id}"
            )
            raise ForbiddenError(f"Not authorized to {action} this licitation")
        return licitation

    def update(
        self,
        current_user_id: int,
        is_admin_caller: bool,
        licitation_id: int,
        fields: LicitationFields,
    ) -> LicitationRecord:
        """Apply a partial update.

        Dates are re-validated against whichever bound was not supplied,
        using the stored value for it.
        """
        licitation = self._get_owned(current_user_id, is_admin_caller, licitation_id, "update")

        changes: dict[str, Any] = {}
        if fields.start_date and fields.end_date:
            start = parse_date(fields.start_date)
            end = parse_date(fields.end_date)
            if start is None or end is None:
                raise BadRequestError("Invalid date format")
            if end <= start:
                raise BadRequestError("End date must be after start date")
            changes.update(start_date=start, end_date=end)
        elif fields.start_date:
            start = parse_date(fields.start_date)
            if start is None:
                raise BadRequestError("Invalid start date format")
            if licitation.end_date <= start:
                raise BadRequestError("End date must be after new start date")
            changes["start_date"] = start
        elif fields.end_date:
            end = parse_date(fields.end_date)
            if end is None:
                raise BadRequestError("Invalid end date format")
            if end <= licitation.start_date:
                raise BadRequestError("New end date must be after start date")
            changes["end_date"] = end

        if fields.title is not None:
            if not fields.title:
                raise BadRequestError("Title cannot be empty")
            changes["title"] = fields.title
        if fields.description is not None:
            if not fields.description:
                raise BadRequestError("Description cannot be empty")
            changes["description"] = fields.description
        if fields.is_lowest_price is not None:
            changes["is_lowest_price"] = fields.is_lowest_price

        if not changes:
            return licitation

        updated = self.store.update(licitation_id, changes)
        logger.info(f"Licitation {licitation_id} updated by user {current_user_id}")
        return updated

    def delete(self, current_user_id: int, is_admin_caller: bool, licitation_id: int) -> None:
        """Permanently remove a licitation."""
        self._get_owned(current_user_id, is_admin_caller, licitation_id, "delete")
        self.store.delete(licitation_id)
        logger.info(f"Licitation {licitation_id} deleted by user {current_user_id}")
