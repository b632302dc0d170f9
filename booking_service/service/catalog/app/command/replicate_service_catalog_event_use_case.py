from typing import assert_never
from uuid import UUID

from booking_service.platform.logging.loguru_io import Logger
from booking_service.service.catalog.app.interface.i_category_repo import ICategoryRepo
from booking_service.service.catalog.app.interface.i_replica_repo import IReplicaRepo
from booking_service.service.catalog.app.interface.i_service_repo import IServiceRepo
from booking_service.service.catalog.domain.domain_event.service_catalog_domain_event import (
    CategoryCreatedEvent,
    CategoryDeletedEvent,
    CategoryEditedEvent,
    ServiceCatalogDomainEvent,
    ServiceCreatedEvent,
    ServiceDeletedEvent,
    ServiceEditedEvent,
)


class ReplicateServiceCatalogEventUseCase:
    """
    Apply service-catalog events to the local service and category read-models.

    Created: insert unless the id already exists.
    Edited: overwrite mutable fields of an existing row, keeping created_at;
    skipped with a warning when the row is missing.
    Deleted: remove the row; skipped with a warning when missing.
    """

    def __init__(self, *, service_repo: IServiceRepo, category_repo: ICategoryRepo) -> None:
        self.service_repo = service_repo
        self.category_repo = category_repo

    @Logger.io
    async def execute(self, *, event: ServiceCatalogDomainEvent) -> None:
        match event:
            case ServiceCreatedEvent():
                await self._create(self.service_repo, 'Service', event.service_id, event.to_service())
            case ServiceEditedEvent():
                await self._update(self.service_repo, 'Service', event.service_id, event.to_service())
            case ServiceDeletedEvent():
                await self._delete(self.service_repo, 'Service', event.service_id)
            case CategoryCreatedEvent():
                await self._create(
                    self.category_repo, 'Category', event.category_id, event.to_category()
                )
            case CategoryEditedEvent():
                await self._update(
                    self.category_repo, 'Category', event.category_id, event.to_category()
                )
            case CategoryDeletedEvent():
                await self._delete(self.category_repo, 'Category', event.category_id)
            case _:
                assert_never(event)

    @staticmethod
    async def _create(repo: IReplicaRepo, kind: str, entity_id: UUID, entity: object) -> None:
        if await repo.exists(entity_id=entity_id):
            Logger.base.warning(f'{kind} {entity_id} already exists, skipping creation')
            return
        await repo.create(entity=entity)
        Logger.base.info(f'{kind} {entity_id} created')

    @staticmethod
    async def _update(repo: IReplicaRepo, kind: str, entity_id: UUID, entity: object) -> None:
        if not await repo.exists(entity_id=entity_id):
            Logger.base.warning(f'{kind} {entity_id} not found for update')
            return
        # The store carries created_at over from the existing row
        await repo.update(entity=entity)
        Logger.base.info(f'{kind} {entity_id} updated')

    @staticmethod
    async def _delete(repo: IReplicaRepo, kind: str, entity_id: UUID) -> None:
        if not await repo.delete(entity_id=entity_id):
            Logger.base.warning(f'{kind} {entity_id} not found for deletion')
            return
        Logger.base.info(f'{kind} {entity_id} deleted')
