"""
Unit tests for CancelBookingUseCase

Test Focus:
1. Pending/Confirmed bookings become Cancelled and a BookingCancelledEvent is published
2. Cancelled/Completed bookings are rejected and the stored status stays the same
3. Only the owning customer can cancel
"""

from datetime import datetime, timedelta
from unittest.mock import AsyncMock

import pytest

from booking_service.platform.exception.exceptions import (
    AuthorizationError,
    ConflictError,
    ConflictKind,
    NotFoundError,
)
from booking_service.service.booking.app.command.cancel_booking_use_case import (
    CancelBookingUseCase,
)
from booking_service.service.booking.domain.domain_event.booking_domain_event import (
    BookingCancelledEvent,
)
from booking_service.service.booking.domain.entity.booking_entity import Booking, BookingStatus
from booking_service.service.booking.driven_adapter.repo.booking_repo_impl import BookingRepoImpl


@pytest.mark.unit
class TestCancelBooking:
    @pytest.fixture
    def booking_repo(self, database) -> BookingRepoImpl:
        return BookingRepoImpl(database=database)

    @pytest.fixture
    def mock_event_publisher(self) -> AsyncMock:
        return AsyncMock()

    @pytest.fixture
    def use_case(
        self, booking_repo: BookingRepoImpl, mock_event_publisher: AsyncMock
    ) -> CancelBookingUseCase:
        return CancelBookingUseCase(booking_repo=booking_repo, event_publisher=mock_event_publisher)

    async def _store(
        self,
        booking_repo: BookingRepoImpl,
        *,
        customer,
        tenant_id,
        active_service,
        start: datetime,
        status: BookingStatus,
    ) -> Booking:
        booking = Booking.create(
            tenant_id=tenant_id,
            owner_id=customer.user_id,
            service_id=active_service.id,
            start_date_time=start,
            duration_minutes=active_service.duration_minutes,
        )
        booking.status = status
        return await booking_repo.create(booking=booking)

    @pytest.mark.asyncio
    @pytest.mark.parametrize('status', [BookingStatus.PENDING, BookingStatus.CONFIRMED])
    async def test_cancels_active_booking_and_publishes_event(
        self,
        use_case: CancelBookingUseCase,
        booking_repo: BookingRepoImpl,
        mock_event_publisher: AsyncMock,
        customer,
        tenant_id,
        active_service,
        future_start: datetime,
        status: BookingStatus,
    ) -> None:
        # Arrange
        booking = await self._store(
            booking_repo,
            customer=customer,
            tenant_id=tenant_id,
            active_service=active_service,
            start=future_start,
            status=status,
        )

        # Act
        result = await use_case.execute(booking_id=booking.id, user=customer)

        # Assert
        assert result.status == BookingStatus.CANCELLED
        stored = await booking_repo.get_by_id(booking_id=booking.id)
        assert stored is not None
        assert stored.status == BookingStatus.CANCELLED
        assert stored.created_at == booking.created_at

        mock_event_publisher.publish_booking_cancelled.assert_awaited_once()
        event = mock_event_publisher.publish_booking_cancelled.call_args.kwargs['event']
        assert isinstance(event, BookingCancelledEvent)
        assert event.booking_id == booking.id
        assert event.tenant_id == tenant_id
        assert event.owner_id == customer.user_id
        assert event.service_id == active_service.id

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ('status', 'message'),
        [
            (BookingStatus.CANCELLED, 'Booking is already cancelled'),
            (BookingStatus.COMPLETED, 'Cannot cancel a completed booking'),
        ],
    )
    async def test_terminal_booking_is_rejected_and_left_unchanged(
        self,
        use_case: CancelBookingUseCase,
        booking_repo: BookingRepoImpl,
        mock_event_publisher: AsyncMock,
        customer,
        tenant_id,
        active_service,
        future_start: datetime,
        status: BookingStatus,
        message: str,
    ) -> None:
        booking = await self._store(
            booking_repo,
            customer=customer,
            tenant_id=tenant_id,
            active_service=active_service,
            start=future_start,
            status=status,
        )

        with pytest.raises(ConflictError, match=message) as exc_info:
            await use_case.execute(booking_id=booking.id, user=customer)

        assert exc_info.value.conflict_type == ConflictKind.STATUS
        stored = await booking_repo.get_by_id(booking_id=booking.id)
        assert stored is not None
        assert stored.status == status
        mock_event_publisher.publish_booking_cancelled.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_cancel_is_not_repeatable(
        self,
        use_case: CancelBookingUseCase,
        booking_repo: BookingRepoImpl,
        customer,
        tenant_id,
        active_service,
        future_start: datetime,
    ) -> None:
        booking = await self._store(
            booking_repo,
            customer=customer,
            tenant_id=tenant_id,
            active_service=active_service,
            start=future_start,
            status=BookingStatus.PENDING,
        )
        await use_case.execute(booking_id=booking.id, user=customer)

        with pytest.raises(ConflictError, match='already cancelled'):
            await use_case.execute(booking_id=booking.id, user=customer)

    @pytest.mark.asyncio
    async def test_only_owner_can_cancel(
        self,
        use_case: CancelBookingUseCase,
        booking_repo: BookingRepoImpl,
        customer,
        other_customer,
        tenant_id,
        active_service,
        future_start: datetime,
    ) -> None:
        booking = await self._store(
            booking_repo,
            customer=customer,
            tenant_id=tenant_id,
            active_service=active_service,
            start=future_start + timedelta(hours=3),
            status=BookingStatus.PENDING,
        )

        with pytest.raises(AuthorizationError, match='your own bookings'):
            await use_case.execute(booking_id=booking.id, user=other_customer)

    @pytest.mark.asyncio
    async def test_unknown_booking_is_not_found(
        self, use_case: CancelBookingUseCase, customer, active_service
    ) -> None:
        with pytest.raises(NotFoundError):
            await use_case.execute(booking_id=active_service.id, user=customer)
