from decimal import Decimal
from typing import Annotated, Literal
from uuid import UUID

from pydantic import Field

from booking_service.service.catalog.domain.entity.category_entity import Category
from booking_service.service.catalog.domain.entity.service_entity import Service
from booking_service.service.shared_kernel.domain.domain_event.domain_event import DomainEvent


class _ServicePayload(DomainEvent):
    service_id: UUID
    tenant_id: UUID
    name: str
    description: str | None = None
    price: Decimal = Decimal('0')
    duration_minutes: int = Field(gt=0)
    category_id: UUID | None = None
    is_active: bool = True

    def to_service(self) -> Service:
        return Service(
            id=self.service_id,
            tenant_id=self.tenant_id,
            name=self.name,
            description=self.description,
            price=self.price,
            duration_minutes=self.duration_minutes,
            category_id=self.category_id,
            is_active=self.is_active,
        )


class ServiceCreatedEvent(_ServicePayload):
    event_type: Literal['ServiceCreatedEvent'] = 'ServiceCreatedEvent'


class ServiceEditedEvent(_ServicePayload):
    event_type: Literal['ServiceEditedEvent'] = 'ServiceEditedEvent'


class ServiceDeletedEvent(DomainEvent):
    event_type: Literal['ServiceDeletedEvent'] = 'ServiceDeletedEvent'
    service_id: UUID
    tenant_id: UUID | None = None


class _CategoryPayload(DomainEvent):
    category_id: UUID
    tenant_id: UUID
    name: str

    def to_category(self) -> Category:
        return Category(id=self.category_id, tenant_id=self.tenant_id, name=self.name)


class CategoryCreatedEvent(_CategoryPayload):
    event_type: Literal['CategoryCreatedEvent'] = 'CategoryCreatedEvent'


class CategoryEditedEvent(_CategoryPayload):
    event_type: Literal['CategoryEditedEvent'] = 'CategoryEditedEvent'


class CategoryDeletedEvent(DomainEvent):
    event_type: Literal['CategoryDeletedEvent'] = 'CategoryDeletedEvent'
    category_id: UUID
    tenant_id: UUID | None = None


ServiceCatalogDomainEvent = Annotated[
    ServiceCreatedEvent
    | ServiceEditedEvent
    | ServiceDeletedEvent
    | CategoryCreatedEvent
    | CategoryEditedEvent
    | CategoryDeletedEvent,
    Field(discriminator='event_type'),
]
