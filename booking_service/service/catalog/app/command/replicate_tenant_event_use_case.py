from typing import assert_never

import attrs

from booking_service.platform.logging.loguru_io import Logger
from booking_service.service.catalog.app.interface.i_tenant_repo import ITenantRepo
from booking_service.service.catalog.domain.domain_event.tenant_domain_event import (
    TenantCreatedEvent,
    TenantDomainEvent,
    TenantUpdatedEvent,
)


class ReplicateTenantEventUseCase:
    """
    Apply tenant-service events to the local tenant read-model.

    Idempotent: a replayed TenantCreatedEvent is a no-op and an update for an
    unknown tenant is skipped, so redelivery never corrupts the replica.
    """

    def __init__(self, *, tenant_repo: ITenantRepo) -> None:
        self.tenant_repo = tenant_repo

    @Logger.io
    async def execute(self, *, event: TenantDomainEvent) -> None:
        match event:
            case TenantCreatedEvent():
                await self._created(event)
            case TenantUpdatedEvent():
                await self._updated(event)
            case _:
                assert_never(event)

    async def _created(self, event: TenantCreatedEvent) -> None:
        if await self.tenant_repo.exists(entity_id=event.tenant_id):
            Logger.base.warning(f'Tenant {event.tenant_id} already exists, skipping creation')
            return
        await self.tenant_repo.create(entity=event.to_tenant())
        Logger.base.info(f'Tenant {event.tenant_id} created from event {event.event_id}')

    async def _updated(self, event: TenantUpdatedEvent) -> None:
        existing = await self.tenant_repo.get_by_id(entity_id=event.tenant_id)
        if existing is None:
            Logger.base.warning(f'Tenant {event.tenant_id} not found for update')
            return
        incoming = event.to_tenant()
        await self.tenant_repo.update(
            entity=attrs.evolve(
                existing,
                business_name=incoming.business_name,
                email=incoming.email,
                phone=incoming.phone,
                address=incoming.address,
            )
        )
        Logger.base.info(f'Tenant {event.tenant_id} updated from event {event.event_id}')
