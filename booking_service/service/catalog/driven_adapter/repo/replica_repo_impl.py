from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any, ClassVar, Generic, TypeVar
from uuid import UUID

import attrs
from sqlalchemy import delete

from booking_service.platform.database.orm_db_setting import Base, Database
from booking_service.platform.exception.exceptions import DatabaseError
from booking_service.service.catalog.app.interface.i_category_repo import ICategoryRepo
from booking_service.service.catalog.app.interface.i_service_repo import IServiceRepo
from booking_service.service.catalog.app.interface.i_tenant_repo import ITenantRepo
from booking_service.service.catalog.domain.entity.category_entity import Category
from booking_service.service.catalog.domain.entity.service_entity import Service
from booking_service.service.catalog.domain.entity.tenant_entity import Tenant
from booking_service.service.catalog.driven_adapter.repo.replica_model import (
    CategoryModel,
    ServiceModel,
    TenantModel,
)


_E = TypeVar('_E', Service, Category, Tenant)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class _SqlReplicaRepo(Generic[_E]):
    """Columns mirror the entity's attrs fields one to one."""

    entity_cls: ClassVar[type]
    model_cls: ClassVar[type[Base]]

    def __init__(self, *, database: Database, clock: Callable[[], datetime] = _utc_now) -> None:
        self.database = database
        self.clock = clock

    @property
    def entity_name(self) -> str:
        return self.entity_cls.__name__

    def _to_entity(self, row: Any) -> _E:
        return self.entity_cls(
            **{field.name: getattr(row, field.name) for field in attrs.fields(self.entity_cls)}
        )

    async def get_by_id(self, *, entity_id: UUID) -> _E | None:
        async with self.database.session() as session:
            row = await session.get(self.model_cls, entity_id)
            return self._to_entity(row) if row is not None else None

    async def exists(self, *, entity_id: UUID) -> bool:
        return await self.get_by_id(entity_id=entity_id) is not None

    async def create(self, *, entity: _E) -> _E:
        async with self.database.session() as session:
            if await session.get(self.model_cls, entity.id) is not None:
                raise DatabaseError(
                    operation='insert',
                    entity=self.entity_name,
                    message=f'{self.entity_name} {entity.id} already exists',
                )
            entity = attrs.evolve(entity)
            entity.mark_created(self.clock())
            row = self.model_cls(**attrs.asdict(entity, recurse=False))
            session.add(row)
            await session.flush()
            return self._to_entity(row)

    async def update(self, *, entity: _E) -> _E:
        async with self.database.session() as session:
            row = await session.get(self.model_cls, entity.id, with_for_update=True)
            if row is None:
                raise DatabaseError(
                    operation='update',
                    entity=self.entity_name,
                    message=f'{self.entity_name} {entity.id} does not exist',
                )
            entity = attrs.evolve(entity, created_at=row.created_at)
            entity.mark_updated(self.clock())
            for name, value in attrs.asdict(entity, recurse=False).items():
                setattr(row, name, value)
            await session.flush()
            return self._to_entity(row)

    async def delete(self, *, entity_id: UUID) -> bool:
        async with self.database.session() as session:
            result = await session.execute(
                delete(self.model_cls).where(self.model_cls.id == entity_id)  # type: ignore[attr-defined]
            )
            return result.rowcount > 0


class ServiceRepoImpl(_SqlReplicaRepo[Service], IServiceRepo):
    entity_cls = Service
    model_cls = ServiceModel


class CategoryRepoImpl(_SqlReplicaRepo[Category], ICategoryRepo):
    entity_cls = Category
    model_cls = CategoryModel


class TenantRepoImpl(_SqlReplicaRepo[Tenant], ITenantRepo):
    entity_cls = Tenant
    model_cls = TenantModel
