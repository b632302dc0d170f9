"""Booking request / query DTOs."""

from datetime import datetime, timezone
from uuid import UUID

import attrs
from pydantic import BaseModel, Field, field_validator

from booking_service.service.booking.domain.entity.booking_entity import (
    NOTES_MAX_LENGTH,
    Booking,
    BookingStatus,
)


DEFAULT_PAGE_LIMIT = 20
MAX_PAGE_LIMIT = 100


def _as_utc(v: datetime | None) -> datetime | None:
    if v is None or v.tzinfo:
        return v
    return v.replace(tzinfo=timezone.utc)


class CreateBookingRequest(BaseModel):
    service_id: UUID
    start_date_time: datetime
    notes: str | None = Field(default=None, max_length=NOTES_MAX_LENGTH)

    @field_validator('start_date_time')
    @classmethod
    def assume_utc(cls, v: datetime) -> datetime:
        return _as_utc(v)  # type: ignore[return-value]


class BookingListFilter(BaseModel):
    tenant_id: UUID | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    status: BookingStatus | None = None
    offset: int = Field(default=0, ge=0)
    limit: int = Field(default=DEFAULT_PAGE_LIMIT, ge=1, le=MAX_PAGE_LIMIT)

    @field_validator('start_date', 'end_date')
    @classmethod
    def assume_utc(cls, v: datetime | None) -> datetime | None:
        return _as_utc(v)

    def matches(self, booking: Booking) -> bool:
        if self.start_date is not None and booking.start_date_time < self.start_date:
            return False
        if self.end_date is not None and booking.end_date_time > self.end_date:
            return False
        if self.status is not None and booking.status != self.status:
            return False
        return True


@attrs.define(frozen=True)
class PaginatedBookings:
    items: list[Booking]
    total_count: int
    offset: int
    limit: int
