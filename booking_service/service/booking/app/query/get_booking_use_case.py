from uuid import UUID

from booking_service.platform.exception.exceptions import AuthorizationError
from booking_service.platform.logging.loguru_io import Logger
from booking_service.service.booking.app.interface.i_booking_repo import IBookingRepo
from booking_service.service.booking.domain.entity.booking_entity import Booking
from booking_service.service.shared_kernel.domain.value_object.user_context import UserContext


class GetBookingUseCase:
    def __init__(self, *, booking_repo: IBookingRepo) -> None:
        self.booking_repo = booking_repo

    @Logger.io
    async def execute(self, *, booking_id: UUID, user: UserContext) -> Booking | None:
        """Customers see their own bookings, providers see their tenant's."""
        booking = await self.booking_repo.get_by_id(booking_id=booking_id)
        if booking is None:
            return None

        if user.is_customer:
            if booking.owner_id != user.user_id:
                raise AuthorizationError(
                    'You can only view your own bookings', resource='Booking', action='view'
                )
        elif booking.tenant_id != user.tenant_id:
            raise AuthorizationError(
                'You can only view bookings from your tenant', resource='Booking', action='view'
            )

        return booking
