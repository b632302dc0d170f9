from datetime import datetime, timedelta
from enum import StrEnum
from uuid import UUID

import attrs
from uuid_utils.compat import uuid7

from booking_service.platform.exception.exceptions import (
    ConflictError,
    ConflictKind,
    ValidationError,
)
from booking_service.service.shared_kernel.domain.capability.timestamped import TimestampedMixin


NOTES_MAX_LENGTH = 1000


class BookingStatus(StrEnum):
    PENDING = 'Pending'
    CONFIRMED = 'Confirmed'
    COMPLETED = 'Completed'
    CANCELLED = 'Cancelled'


@attrs.define
class Booking(TimestampedMixin):
    id: UUID
    tenant_id: UUID
    owner_id: UUID
    service_id: UUID
    start_date_time: datetime
    end_date_time: datetime
    status: BookingStatus = BookingStatus.PENDING
    notes: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def create(
        cls,
        *,
        tenant_id: UUID,
        owner_id: UUID,
        service_id: UUID,
        start_date_time: datetime,
        duration_minutes: int,
        notes: str | None = None,
    ) -> 'Booking':
        if duration_minutes <= 0:
            raise ValidationError('Service duration must be positive')
        if notes is not None and len(notes) > NOTES_MAX_LENGTH:
            raise ValidationError(f'Notes cannot exceed {NOTES_MAX_LENGTH} characters')

        return cls(
            id=uuid7(),
            tenant_id=tenant_id,
            owner_id=owner_id,
            service_id=service_id,
            start_date_time=start_date_time,
            end_date_time=start_date_time + timedelta(minutes=duration_minutes),
            status=BookingStatus.PENDING,
            notes=notes,
        )

    @property
    def is_active(self) -> bool:
        return self.status is not BookingStatus.CANCELLED

    def overlaps(self, *, start: datetime, end: datetime) -> bool:
        return self.start_date_time < end and start < self.end_date_time

    def cancel(self) -> 'Booking':
        if self.status is BookingStatus.CANCELLED:
            raise ConflictError(ConflictKind.STATUS, 'Booking is already cancelled')
        if self.status is BookingStatus.COMPLETED:
            raise ConflictError(ConflictKind.STATUS, 'Cannot cancel a completed booking')
        return attrs.evolve(self, status=BookingStatus.CANCELLED)
