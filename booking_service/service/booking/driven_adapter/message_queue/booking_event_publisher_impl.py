"""
Booking Event Publisher Implementation

Concrete adapter that implements IBookingEventPublisher using confluent-kafka.
Every booking event goes to the booking-events topic keyed by booking id, so
all events of one booking share a partition and keep their order.
"""

from typing import Any

from confluent_kafka import KafkaException

from booking_service.platform.exception.exceptions import EventPublishError
from booking_service.platform.logging.loguru_io import Logger
from booking_service.platform.message_queue.event_publisher import (
    DeliveryReceipt,
    publish_domain_event,
)
from booking_service.platform.message_queue.kafka_constant_builder import KafkaTopicBuilder
from booking_service.service.booking.app.interface.i_booking_event_publisher import (
    IBookingEventPublisher,
)
from booking_service.service.booking.domain.domain_event.booking_domain_event import (
    BookingCancelledEvent,
    BookingCreatedEvent,
    BookingDomainEvent,
)


class BookingEventPublisherImpl(IBookingEventPublisher):
    def __init__(self, *, producer: Any = None, topic: str | None = None) -> None:
        # producer=None falls back to the process-wide AIOProducer
        self.producer = producer
        self.topic = topic or KafkaTopicBuilder.booking_events()

    async def _publish(self, event: BookingDomainEvent) -> DeliveryReceipt:
        try:
            return await publish_domain_event(
                event=event,
                topic=self.topic,
                key=str(event.booking_id),
                producer=self.producer,
            )
        except (KafkaException, BufferError) as e:
            Logger.base.bind(event_id=str(event.event_id), event_type=event.event_type).error(
                f'Failed to publish {event.event_type} for booking {event.booking_id}: {e}'
            )
            raise EventPublishError(
                f'Failed to publish {event.event_type}. Please try again later.'
            ) from e

    @Logger.io
    async def publish_booking_created(self, *, event: BookingCreatedEvent) -> DeliveryReceipt:
        return await self._publish(event)

    @Logger.io
    async def publish_booking_cancelled(self, *, event: BookingCancelledEvent) -> DeliveryReceipt:
        return await self._publish(event)
