from typing import Annotated, Literal
from uuid import UUID

from pydantic import Field

from booking_service.service.catalog.domain.entity.tenant_entity import Tenant
from booking_service.service.shared_kernel.domain.domain_event.domain_event import DomainEvent


class _TenantPayload(DomainEvent):
    tenant_id: UUID
    business_name: str
    business_email: str | None = None
    business_phone: str | None = None
    address: str | None = None

    def to_tenant(self) -> Tenant:
        return Tenant(
            id=self.tenant_id,
            business_name=self.business_name,
            email=self.business_email,
            phone=self.business_phone,
            address=self.address,
        )


class TenantCreatedEvent(_TenantPayload):
    event_type: Literal['TenantCreatedEvent'] = 'TenantCreatedEvent'


class TenantUpdatedEvent(_TenantPayload):
    event_type: Literal['TenantUpdatedEvent'] = 'TenantUpdatedEvent'


TenantDomainEvent = Annotated[
    TenantCreatedEvent | TenantUpdatedEvent,
    Field(discriminator='event_type'),
]
