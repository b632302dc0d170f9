from booking_service.platform.exception.exceptions import AuthorizationError
from booking_service.platform.logging.loguru_io import Logger
from booking_service.service.booking.app.dto.booking_dto import BookingListFilter, PaginatedBookings
from booking_service.service.booking.app.interface.i_booking_repo import IBookingRepo
from booking_service.service.booking.domain.entity.booking_entity import Booking
from booking_service.service.shared_kernel.domain.value_object.user_context import UserContext


class ListBookingsUseCase:
    def __init__(self, *, booking_repo: IBookingRepo) -> None:
        self.booking_repo = booking_repo

    @Logger.io
    async def execute(self, *, filters: BookingListFilter, user: UserContext) -> PaginatedBookings:
        """
        List bookings visible to the caller.

        Customers get their own bookings, optionally narrowed to one tenant.
        Providers get their tenant's bookings and may not pick another tenant.
        total_count is taken after filtering and before paging.
        """
        bookings = await self._visible_bookings(filters=filters, user=user)

        matching = sorted(
            (booking for booking in bookings if filters.matches(booking)),
            key=lambda booking: booking.start_date_time,
        )
        page = matching[filters.offset : filters.offset + filters.limit]

        return PaginatedBookings(
            items=page,
            total_count=len(matching),
            offset=filters.offset,
            limit=filters.limit,
        )

    async def _visible_bookings(
        self, *, filters: BookingListFilter, user: UserContext
    ) -> list[Booking]:
        if user.is_customer:
            bookings = await self.booking_repo.list_by_owner(owner_id=user.user_id)
            if filters.tenant_id is not None:
                bookings = [b for b in bookings if b.tenant_id == filters.tenant_id]
            return bookings

        if filters.tenant_id is not None:
            raise AuthorizationError(
                "Providers cannot specify tenant ID. They can only view their own tenant's bookings.",
                resource='Booking',
                action='list',
            )
        if user.tenant_id is None:
            raise AuthorizationError(
                'Providers must have a tenant ID.', resource='Booking', action='list'
            )
        return await self.booking_repo.list_by_tenant(tenant_id=user.tenant_id)
