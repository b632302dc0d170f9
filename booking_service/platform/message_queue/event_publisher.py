"""
Domain Event Publisher

Event publishing using confluent-kafka's experimental AsyncIO Producer.
Events are serialized as camelCase JSON with orjson and keyed so that all
events of one aggregate land on the same partition in order.

Features:
- Global async producer instance for connection reuse
- Idempotent producer with acks=all for reliability
- Awaits the broker acknowledgement and returns where the event landed
"""

from typing import Any

import attrs
from confluent_kafka.experimental.aio import AIOProducer
from opentelemetry import trace
import orjson

from booking_service.platform.config.core_setting import settings
from booking_service.platform.logging.loguru_io import Logger
from booking_service.service.shared_kernel.domain.domain_event.domain_event import DomainEvent


@attrs.frozen
class DeliveryReceipt:
    event_id: str
    event_type: str
    topic: str
    partition: int
    offset: int


# Global async producer instance
_global_producer: AIOProducer | None = None


async def _get_global_producer() -> AIOProducer:
    """Get global async producer instance - avoid creating new producer on every publish"""
    global _global_producer
    if _global_producer is None:
        _global_producer = AIOProducer(settings.KAFKA_PRODUCER_CONFIG)
    return _global_producer


def serialize_event(event: DomainEvent) -> bytes:
    return orjson.dumps(event.to_wire())


async def publish_domain_event(
    *,
    event: DomainEvent,
    topic: str,
    key: str,
    producer: Any = None,
) -> DeliveryReceipt:
    """
    Publish a domain event and wait for the broker acknowledgement.

    Args:
        event: Domain event to publish
        topic: Kafka topic name
        key: Partition key; events sharing a key keep their relative order
        producer: Optional producer override, defaults to the global AIOProducer

    Raises:
        KafkaException: the broker rejected the message or delivery timed out
    """
    tracer = trace.get_tracer(__name__)

    with tracer.start_as_current_span(
        'kafka.publish',
        attributes={
            'messaging.system': 'kafka',
            'messaging.destination': topic,
            'messaging.destination_kind': 'topic',
            'messaging.kafka.message_key': key,
            'event.type': event.event_type,
            'event.id': str(event.event_id),
        },
    ) as span:
        producer = producer or await _get_global_producer()

        # produce() enqueues and hands back a future resolved by the delivery report
        delivery_future = await producer.produce(
            topic=topic, value=serialize_event(event), key=key.encode()
        )
        message = await delivery_future

        receipt = DeliveryReceipt(
            event_id=str(event.event_id),
            event_type=event.event_type,
            topic=message.topic() or topic,
            partition=message.partition(),
            offset=message.offset(),
        )
        span.set_attribute('messaging.kafka.partition', receipt.partition)
        span.set_attribute('messaging.kafka.offset', receipt.offset)

        Logger.base.bind(
            event_id=receipt.event_id,
            event_type=receipt.event_type,
            topic=receipt.topic,
            partition=receipt.partition,
            offset=receipt.offset,
        ).info(
            f'Published {receipt.event_type} to {receipt.topic} '
            f'(partition={receipt.partition}, offset={receipt.offset})'
        )
        return receipt


async def close_producer() -> None:
    global _global_producer
    if _global_producer is not None:
        await _global_producer.flush()
        await _global_producer.close()
        _global_producer = None
        Logger.base.info('Closed async producer')
