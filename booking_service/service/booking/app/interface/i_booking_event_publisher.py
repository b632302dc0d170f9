from abc import ABC, abstractmethod

from booking_service.platform.message_queue.event_publisher import DeliveryReceipt
from booking_service.service.booking.domain.domain_event.booking_domain_event import (
    BookingCancelledEvent,
    BookingCreatedEvent,
)


class IBookingEventPublisher(ABC):
    """
    Booking event publisher interface.

    Events go to the booking-events topic keyed by booking id. Delivery is
    awaited; failures are raised to the caller without retry.
    """

    @abstractmethod
    async def publish_booking_created(self, *, event: BookingCreatedEvent) -> DeliveryReceipt:
        pass

    @abstractmethod
    async def publish_booking_cancelled(self, *, event: BookingCancelledEvent) -> DeliveryReceipt:
        pass
