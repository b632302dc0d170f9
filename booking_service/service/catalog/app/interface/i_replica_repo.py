from abc import ABC, abstractmethod
from typing import Generic, TypeVar
from uuid import UUID


_E = TypeVar('_E')


class IReplicaRepo(ABC, Generic[_E]):
    """
    Storage for a read-model replicated from an upstream service.

    The replication handlers are the only writers; booking use cases only read.
    """

    @abstractmethod
    async def get_by_id(self, *, entity_id: UUID) -> _E | None:
        pass

    @abstractmethod
    async def exists(self, *, entity_id: UUID) -> bool:
        pass

    @abstractmethod
    async def create(self, *, entity: _E) -> _E:
        """Insert a new row; created_at/updated_at are stamped by the store"""
        pass

    @abstractmethod
    async def update(self, *, entity: _E) -> _E:
        """Overwrite an existing row, keeping its created_at"""
        pass

    @abstractmethod
    async def delete(self, *, entity_id: UUID) -> bool:
        pass
