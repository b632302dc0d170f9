from uuid import UUID

from opentelemetry import trace

from booking_service.platform.exception.exceptions import AuthorizationError, NotFoundError
from booking_service.platform.logging.loguru_io import Logger
from booking_service.service.booking.app.interface.i_booking_event_publisher import (
    IBookingEventPublisher,
)
from booking_service.service.booking.app.interface.i_booking_repo import IBookingRepo
from booking_service.service.booking.domain.domain_event.booking_domain_event import (
    BookingCancelledEvent,
)
from booking_service.service.booking.domain.entity.booking_entity import Booking
from booking_service.service.shared_kernel.domain.value_object.user_context import UserContext


class CancelBookingUseCase:
    """
    Cancel a Pending or Confirmed booking on behalf of its owner.

    Cancelled and Completed bookings are rejected with a status conflict and
    left untouched. Bookings are never deleted.
    """

    def __init__(
        self,
        *,
        booking_repo: IBookingRepo,
        event_publisher: IBookingEventPublisher,
    ) -> None:
        self.booking_repo = booking_repo
        self.event_publisher = event_publisher
        self.tracer = trace.get_tracer(__name__)

    @Logger.io
    async def execute(self, *, booking_id: UUID, user: UserContext) -> Booking:
        with self.tracer.start_as_current_span(
            'use_case.cancel_booking',
            attributes={'booking.id': str(booking_id), 'user.id': str(user.user_id)},
        ):
            user.ensure_customer()

            booking = await self.booking_repo.get_by_id(booking_id=booking_id)
            if booking is None:
                raise NotFoundError('Booking', booking_id)
            if booking.owner_id != user.user_id:
                raise AuthorizationError(
                    'You can only cancel your own bookings', resource='Booking', action='cancel'
                )

            cancelled = await self.booking_repo.update(booking=booking.cancel())
            await self.event_publisher.publish_booking_cancelled(
                event=BookingCancelledEvent.from_booking(cancelled)
            )

            Logger.base.info(f'[CANCEL] Booking {booking_id} cancelled')
            return cancelled
