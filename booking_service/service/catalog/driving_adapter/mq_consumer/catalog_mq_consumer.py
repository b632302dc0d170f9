"""
Replication consumers for the read-models this service does not own.

tenant-events          -> tenant replica
service-catalog-events -> service and category replicas
"""

from collections.abc import Callable
from typing import Any

from confluent_kafka import Consumer

from booking_service.platform.message_queue.base_kafka_consumer import BaseKafkaConsumer
from booking_service.platform.message_queue.event_decoder import EventDecoder
from booking_service.platform.message_queue.kafka_constant_builder import (
    KafkaConsumerGroupBuilder,
    KafkaTopicBuilder,
)
from booking_service.service.catalog.app.command.replicate_service_catalog_event_use_case import (
    ReplicateServiceCatalogEventUseCase,
)
from booking_service.service.catalog.app.command.replicate_tenant_event_use_case import (
    ReplicateTenantEventUseCase,
)
from booking_service.service.catalog.domain.domain_event.service_catalog_domain_event import (
    ServiceCatalogDomainEvent,
)
from booking_service.service.catalog.domain.domain_event.tenant_domain_event import (
    TenantDomainEvent,
)


class TenantEventConsumer(BaseKafkaConsumer[TenantDomainEvent]):
    def __init__(
        self,
        *,
        replicate_tenant_event: ReplicateTenantEventUseCase,
        consumer_factory: Callable[[dict], Any] = Consumer,
        **kwargs: Any,
    ) -> None:
        super().__init__(
            name='tenant-events',
            topic=KafkaTopicBuilder.tenant_events(),
            group_id=KafkaConsumerGroupBuilder.tenant_events(),
            decoder=EventDecoder(TenantDomainEvent),
            consumer_factory=consumer_factory,
            **kwargs,
        )
        self.replicate_tenant_event = replicate_tenant_event

    async def handle(self, event: TenantDomainEvent) -> None:
        await self.replicate_tenant_event.execute(event=event)


class ServiceCatalogEventConsumer(BaseKafkaConsumer[ServiceCatalogDomainEvent]):
    def __init__(
        self,
        *,
        replicate_service_catalog_event: ReplicateServiceCatalogEventUseCase,
        consumer_factory: Callable[[dict], Any] = Consumer,
        **kwargs: Any,
    ) -> None:
        super().__init__(
            name='service-catalog-events',
            topic=KafkaTopicBuilder.service_catalog_events(),
            group_id=KafkaConsumerGroupBuilder.service_catalog_events(),
            decoder=EventDecoder(ServiceCatalogDomainEvent),
            consumer_factory=consumer_factory,
            **kwargs,
        )
        self.replicate_service_catalog_event = replicate_service_catalog_event

    async def handle(self, event: ServiceCatalogDomainEvent) -> None:
        await self.replicate_service_catalog_event.execute(event=event)
