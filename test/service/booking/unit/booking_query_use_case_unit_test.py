"""
Unit tests for GetBookingUseCase and ListBookingsUseCase

Test Focus:
1. Visibility: customers see their own bookings, providers their tenant's
2. Provider tenant filter is refused before any query runs
3. Filtering, ordering by start time, paging and total_count after filtering
"""

from datetime import datetime, timedelta
from unittest.mock import AsyncMock

import pytest

from booking_service.platform.exception.exceptions import AuthorizationError
from booking_service.service.booking.app.dto.booking_dto import BookingListFilter
from booking_service.service.booking.app.query.get_booking_use_case import GetBookingUseCase
from booking_service.service.booking.app.query.list_bookings_use_case import ListBookingsUseCase
from booking_service.service.booking.domain.entity.booking_entity import Booking, BookingStatus
from booking_service.service.booking.driven_adapter.repo.booking_repo_impl import BookingRepoImpl
from booking_service.service.shared_kernel.domain.value_object.user_context import (
    UserContext,
    UserRole,
)


def _booking(*, owner, tenant_id, service_id, start: datetime, minutes: int = 30) -> Booking:
    return Booking.create(
        tenant_id=tenant_id,
        owner_id=owner.user_id,
        service_id=service_id,
        start_date_time=start,
        duration_minutes=minutes,
    )


@pytest.mark.unit
class TestGetBooking:
    @pytest.fixture
    def booking_repo(self, database) -> BookingRepoImpl:
        return BookingRepoImpl(database=database)

    @pytest.mark.asyncio
    async def test_absent_booking_returns_none(self, booking_repo, customer, tenant_id) -> None:
        use_case = GetBookingUseCase(booking_repo=booking_repo)

        assert await use_case.execute(booking_id=tenant_id, user=customer) is None

    @pytest.mark.asyncio
    async def test_customer_sees_own_booking_only(
        self, booking_repo, customer, other_customer, tenant_id, active_service, future_start
    ) -> None:
        booking = await booking_repo.create(
            booking=_booking(
                owner=customer, tenant_id=tenant_id, service_id=active_service.id, start=future_start
            )
        )
        use_case = GetBookingUseCase(booking_repo=booking_repo)

        found = await use_case.execute(booking_id=booking.id, user=customer)
        assert found is not None
        assert found.id == booking.id

        with pytest.raises(AuthorizationError, match='your own bookings'):
            await use_case.execute(booking_id=booking.id, user=other_customer)

    @pytest.mark.asyncio
    async def test_provider_sees_bookings_of_own_tenant_only(
        self, booking_repo, customer, provider, other_tenant_id, active_service, future_start
    ) -> None:
        booking = await booking_repo.create(
            booking=_booking(
                owner=customer,
                tenant_id=provider.tenant_id,
                service_id=active_service.id,
                start=future_start,
            )
        )
        use_case = GetBookingUseCase(booking_repo=booking_repo)
        foreign_provider = UserContext(
            user_id=provider.user_id, role=UserRole.PROVIDER, tenant_id=other_tenant_id
        )

        assert await use_case.execute(booking_id=booking.id, user=provider) is not None
        with pytest.raises(AuthorizationError, match='bookings from your tenant'):
            await use_case.execute(booking_id=booking.id, user=foreign_provider)


@pytest.mark.unit
class TestListBookings:
    @pytest.fixture
    def booking_repo(self, database) -> BookingRepoImpl:
        return BookingRepoImpl(database=database)

    @pytest.fixture
    def use_case(self, booking_repo: BookingRepoImpl) -> ListBookingsUseCase:
        return ListBookingsUseCase(booking_repo=booking_repo)

    @pytest.mark.asyncio
    async def test_customer_lists_own_bookings_across_tenants_ordered_by_start(
        self,
        use_case: ListBookingsUseCase,
        booking_repo: BookingRepoImpl,
        customer,
        other_customer,
        tenant_id,
        other_tenant_id,
        active_service,
        future_start: datetime,
    ) -> None:
        """
        Given: customer has one booking in tenant A and one in tenant B, another customer has one
        When: customer lists without a tenant filter
        Then: both of the customer's bookings, earliest first
        """
        later = await booking_repo.create(
            booking=_booking(
                owner=customer,
                tenant_id=tenant_id,
                service_id=active_service.id,
                start=future_start + timedelta(days=2),
            )
        )
        earlier = await booking_repo.create(
            booking=_booking(
                owner=customer,
                tenant_id=other_tenant_id,
                service_id=other_tenant_id,
                start=future_start,
            )
        )
        await booking_repo.create(
            booking=_booking(
                owner=other_customer,
                tenant_id=tenant_id,
                service_id=active_service.id,
                start=future_start + timedelta(days=5),
            )
        )

        result = await use_case.execute(filters=BookingListFilter(), user=customer)

        assert [b.id for b in result.items] == [earlier.id, later.id]
        assert result.total_count == 2

        narrowed = await use_case.execute(
            filters=BookingListFilter(tenant_id=tenant_id), user=customer
        )
        assert [b.id for b in narrowed.items] == [later.id]

    @pytest.mark.asyncio
    async def test_provider_with_tenant_filter_is_refused_before_query(
        self, provider, tenant_id
    ) -> None:
        mock_repo = AsyncMock()
        use_case = ListBookingsUseCase(booking_repo=mock_repo)

        with pytest.raises(AuthorizationError, match='Providers cannot specify tenant ID'):
            await use_case.execute(filters=BookingListFilter(tenant_id=tenant_id), user=provider)

        mock_repo.list_by_tenant.assert_not_awaited()
        mock_repo.list_by_owner.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_provider_without_tenant_is_refused(self, provider) -> None:
        use_case = ListBookingsUseCase(booking_repo=AsyncMock())
        tenantless = UserContext(user_id=provider.user_id, role=UserRole.PROVIDER)

        with pytest.raises(AuthorizationError, match='must have a tenant ID'):
            await use_case.execute(filters=BookingListFilter(), user=tenantless)

    @pytest.mark.asyncio
    async def test_provider_lists_tenant_bookings_with_filters_and_paging(
        self,
        use_case: ListBookingsUseCase,
        booking_repo: BookingRepoImpl,
        customer,
        other_customer,
        provider,
        other_tenant_id,
        active_service,
        future_start: datetime,
    ) -> None:
        created = []
        for day, owner in enumerate([customer, other_customer, customer, other_customer]):
            created.append(
                await booking_repo.create(
                    booking=_booking(
                        owner=owner,
                        tenant_id=provider.tenant_id,
                        service_id=active_service.id,
                        start=future_start + timedelta(days=day),
                    )
                )
            )
        await booking_repo.create(
            booking=_booking(
                owner=customer,
                tenant_id=other_tenant_id,
                service_id=active_service.id,
                start=future_start,
            )
        )
        cancelled = created[1].cancel()
        await booking_repo.update(booking=cancelled)

        pending = await use_case.execute(
            filters=BookingListFilter(status=BookingStatus.PENDING, offset=1, limit=1),
            user=provider,
        )
        assert pending.total_count == 3
        assert [b.id for b in pending.items] == [created[2].id]
        assert (pending.offset, pending.limit) == (1, 1)

        windowed = await use_case.execute(
            filters=BookingListFilter(
                start_date=future_start + timedelta(days=1),
                end_date=future_start + timedelta(days=2, hours=1),
            ),
            user=provider,
        )
        assert [b.id for b in windowed.items] == [created[1].id, created[2].id]
        assert windowed.total_count == 2
