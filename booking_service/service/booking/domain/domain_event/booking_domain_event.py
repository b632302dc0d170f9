from datetime import datetime
from typing import Literal
from uuid import UUID

from booking_service.service.booking.domain.entity.booking_entity import Booking, BookingStatus
from booking_service.service.shared_kernel.domain.domain_event.domain_event import DomainEvent


class BookingCreatedEvent(DomainEvent):
    event_type: Literal['BookingCreatedEvent'] = 'BookingCreatedEvent'
    booking_id: UUID
    tenant_id: UUID
    owner_id: UUID
    service_id: UUID
    start_date_time: datetime
    end_date_time: datetime
    booking_status: BookingStatus
    notes: str | None = None

    @classmethod
    def from_booking(cls, booking: Booking) -> 'BookingCreatedEvent':
        return cls(
            booking_id=booking.id,
            tenant_id=booking.tenant_id,
            owner_id=booking.owner_id,
            service_id=booking.service_id,
            start_date_time=booking.start_date_time,
            end_date_time=booking.end_date_time,
            booking_status=booking.status,
            notes=booking.notes,
        )


class BookingCancelledEvent(DomainEvent):
    event_type: Literal['BookingCancelledEvent'] = 'BookingCancelledEvent'
    booking_id: UUID
    tenant_id: UUID
    owner_id: UUID
    service_id: UUID

    @classmethod
    def from_booking(cls, booking: Booking) -> 'BookingCancelledEvent':
        return cls(
            booking_id=booking.id,
            tenant_id=booking.tenant_id,
            owner_id=booking.owner_id,
            service_id=booking.service_id,
        )


BookingDomainEvent = BookingCreatedEvent | BookingCancelledEvent
