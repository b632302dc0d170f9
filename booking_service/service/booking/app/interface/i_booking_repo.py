from abc import ABC, abstractmethod
from uuid import UUID

from booking_service.service.booking.domain.entity.booking_entity import Booking


class IBookingRepo(ABC):
    @abstractmethod
    async def create(self, *, booking: Booking) -> Booking:
        """
        Persist a new booking.

        Raises:
            ConflictError: another active booking of the same service already
                holds an overlapping time window
        """
        pass

    @abstractmethod
    async def get_by_id(self, *, booking_id: UUID) -> Booking | None:
        pass

    @abstractmethod
    async def update(self, *, booking: Booking) -> Booking:
        pass

    @abstractmethod
    async def list_by_owner(self, *, owner_id: UUID) -> list[Booking]:
        pass

    @abstractmethod
    async def list_by_tenant(self, *, tenant_id: UUID) -> list[Booking]:
        pass
