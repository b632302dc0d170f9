from abc import ABC, abstractmethod
from datetime import datetime
from uuid import UUID

from booking_service.service.booking.app.dto.availability_dto import AvailabilityCheckResult


class IAvailabilityClient(ABC):
    @abstractmethod
    async def check_availability(
        self,
        *,
        tenant_id: UUID,
        service_id: UUID,
        start: datetime,
        end: datetime,
    ) -> AvailabilityCheckResult:
        """
        Ask the availability service whether [start, end) can be booked.

        Always bounded by a deadline.

        Raises:
            ServiceUnavailableError: deadline exceeded, remote unreachable or
                any other transport failure
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        pass
