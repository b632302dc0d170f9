from collections.abc import Callable
from datetime import datetime, timezone
from uuid import UUID

import attrs
from sqlalchemy import select

from booking_service.platform.database.orm_db_setting import Database
from booking_service.platform.exception.exceptions import (
    ConflictError,
    ConflictKind,
    DatabaseError,
)
from booking_service.platform.logging.loguru_io import Logger
from booking_service.service.booking.app.interface.i_booking_repo import IBookingRepo
from booking_service.service.booking.domain.entity.booking_entity import Booking, BookingStatus
from booking_service.service.booking.driven_adapter.repo.booking_model import BookingModel
from booking_service.service.catalog.driven_adapter.repo.replica_model import ServiceModel


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class BookingRepoImpl(IBookingRepo):
    """
    Booking store on PostgreSQL.

    Inserts are serialized per service: the transaction locks the service's
    replica row, then rejects a window that overlaps another active booking
    of the same tenant and service before writing.
    """

    def __init__(self, *, database: Database, clock: Callable[[], datetime] = _utc_now) -> None:
        self.database = database
        self.clock = clock

    @staticmethod
    def _to_entity(db_booking: BookingModel) -> Booking:
        return Booking(
            id=db_booking.id,
            tenant_id=db_booking.tenant_id,
            owner_id=db_booking.owner_id,
            service_id=db_booking.service_id,
            start_date_time=db_booking.start_date_time,
            end_date_time=db_booking.end_date_time,
            status=BookingStatus(db_booking.status),
            notes=db_booking.notes,
            created_at=db_booking.created_at,
            updated_at=db_booking.updated_at,
        )

    @Logger.io
    async def create(self, *, booking: Booking) -> Booking:
        async with self.database.session() as session:
            await session.execute(
                select(ServiceModel.id)
                .where(ServiceModel.id == booking.service_id)
                .with_for_update()
            )
            if await session.get(BookingModel, booking.id) is not None:
                raise DatabaseError(
                    operation='insert',
                    entity='Booking',
                    message=f'Booking {booking.id} already exists',
                )
            overlapping = await session.execute(
                select(BookingModel.id)
                .where(BookingModel.tenant_id == booking.tenant_id)
                .where(BookingModel.service_id == booking.service_id)
                .where(BookingModel.status != BookingStatus.CANCELLED.value)
                .where(BookingModel.start_date_time < booking.end_date_time)
                .where(BookingModel.end_date_time > booking.start_date_time)
                .limit(1)
            )
            if overlapping.scalar_one_or_none() is not None:
                raise ConflictError(
                    ConflictKind.SLOT_UNAVAILABLE,
                    'The requested time slot is not available',
                )

            booking = attrs.evolve(booking)
            booking.mark_created(self.clock())
            db_booking = BookingModel(
                id=booking.id,
                tenant_id=booking.tenant_id,
                owner_id=booking.owner_id,
                service_id=booking.service_id,
                start_date_time=booking.start_date_time,
                end_date_time=booking.end_date_time,
                status=booking.status.value,
                notes=booking.notes,
                created_at=booking.created_at,
                updated_at=booking.updated_at,
            )
            session.add(db_booking)
            await session.flush()
            return BookingRepoImpl._to_entity(db_booking)

    async def get_by_id(self, *, booking_id: UUID) -> Booking | None:
        async with self.database.session() as session:
            db_booking = await session.get(BookingModel, booking_id)
            return BookingRepoImpl._to_entity(db_booking) if db_booking else None

    @Logger.io
    async def update(self, *, booking: Booking) -> Booking:
        async with self.database.session() as session:
            db_booking = await session.get(BookingModel, booking.id, with_for_update=True)
            if db_booking is None:
                raise DatabaseError(
                    operation='update',
                    entity='Booking',
                    message=f'Booking {booking.id} does not exist',
                )
            booking = attrs.evolve(booking, created_at=db_booking.created_at)
            booking.mark_updated(self.clock())
            db_booking.status = booking.status.value
            db_booking.notes = booking.notes
            db_booking.start_date_time = booking.start_date_time
            db_booking.end_date_time = booking.end_date_time
            db_booking.updated_at = booking.updated_at
            await session.flush()
            return BookingRepoImpl._to_entity(db_booking)

    async def list_by_owner(self, *, owner_id: UUID) -> list[Booking]:
        async with self.database.session() as session:
            result = await session.scalars(
                select(BookingModel).where(BookingModel.owner_id == owner_id)
            )
            return [BookingRepoImpl._to_entity(row) for row in result]

    async def list_by_tenant(self, *, tenant_id: UUID) -> list[Booking]:
        async with self.database.session() as session:
            result = await session.scalars(
                select(BookingModel).where(BookingModel.tenant_id == tenant_id)
            )
            return [BookingRepoImpl._to_entity(row) for row in result]
