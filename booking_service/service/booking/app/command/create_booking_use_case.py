from collections.abc import Callable
from datetime import datetime, timezone
from uuid import UUID

from opentelemetry import trace

from booking_service.platform.exception.exceptions import (
    AuthorizationError,
    ConflictError,
    ConflictKind,
    NotFoundError,
    ValidationError,
)
from booking_service.platform.logging.loguru_io import Logger
from booking_service.service.booking.app.dto.booking_dto import CreateBookingRequest
from booking_service.service.booking.app.interface.i_availability_client import (
    IAvailabilityClient,
)
from booking_service.service.booking.app.interface.i_booking_event_publisher import (
    IBookingEventPublisher,
)
from booking_service.service.booking.app.interface.i_booking_repo import IBookingRepo
from booking_service.service.booking.domain.domain_event.booking_domain_event import (
    BookingCreatedEvent,
)
from booking_service.service.booking.domain.entity.booking_entity import Booking
from booking_service.service.catalog.app.interface.i_service_repo import IServiceRepo
from booking_service.service.shared_kernel.domain.value_object.user_context import UserContext


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class CreateBookingUseCase:
    """
    Turn a booking request into a Pending booking.

    Flow:
    1. Caller must be a customer booking inside an explicit tenant
    2. Start must be in the future
    3. Service must exist, belong to the tenant and be active
    4. Availability service must confirm the [start, start + duration) window
    5. Persist the booking, then publish BookingCreatedEvent

    Every check runs before any remote call or write; a failed check leaves
    no booking and no event behind. A publish failure propagates after the
    booking row has been written.
    """

    def __init__(
        self,
        *,
        booking_repo: IBookingRepo,
        service_repo: IServiceRepo,
        availability_client: IAvailabilityClient,
        event_publisher: IBookingEventPublisher,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self.booking_repo = booking_repo
        self.service_repo = service_repo
        self.availability_client = availability_client
        self.event_publisher = event_publisher
        self.clock = clock
        self.tracer = trace.get_tracer(__name__)

    @Logger.io
    async def execute(
        self,
        *,
        request: CreateBookingRequest,
        user: UserContext,
        tenant_id: UUID | None,
    ) -> Booking:
        with self.tracer.start_as_current_span(
            'use_case.create_booking',
            attributes={
                'service.id': str(request.service_id),
                'user.id': str(user.user_id),
            },
        ):
            user.ensure_customer()
            if tenant_id is None:
                raise AuthorizationError('Tenant ID is required.', resource='Booking', action='create')

            if request.start_date_time <= self.clock():
                raise ValidationError('Booking start time must be in the future')

            service = await self.service_repo.get_by_id(entity_id=request.service_id)
            if service is None:
                raise NotFoundError('Service', request.service_id)
            if service.tenant_id != tenant_id:
                raise AuthorizationError(
                    'You can only book services from your own tenant',
                    resource='Service',
                    action='book',
                )
            if not service.is_active:
                raise ConflictError(
                    ConflictKind.SERVICE_INACTIVE,
                    'The selected service is not currently available for booking',
                )

            booking = Booking.create(
                tenant_id=tenant_id,
                owner_id=user.user_id,
                service_id=service.id,
                start_date_time=request.start_date_time,
                duration_minutes=service.duration_minutes,
                notes=request.notes,
            )

            availability = await self.availability_client.check_availability(
                tenant_id=tenant_id,
                service_id=service.id,
                start=booking.start_date_time,
                end=booking.end_date_time,
            )
            if not availability.is_available:
                raise ConflictError(
                    ConflictKind.SLOT_UNAVAILABLE, availability.unavailable_message()
                )

            booking = await self.booking_repo.create(booking=booking)
            receipt = await self.event_publisher.publish_booking_created(
                event=BookingCreatedEvent.from_booking(booking)
            )

            Logger.base.info(
                f'[CREATE] Booking {booking.id} created for service {service.id} '
                f'({booking.start_date_time:%Y-%m-%d %H:%M} - {booking.end_date_time:%H:%M}), '
                f'event {receipt.event_id} at offset {receipt.offset}'
            )
            return booking
