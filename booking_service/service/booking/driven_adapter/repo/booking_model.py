from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import Index, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from booking_service.platform.database.orm_db_setting import Base, UtcDateTime


class BookingModel(Base):
    __tablename__ = 'booking'
    __table_args__ = (Index('ix_booking_service_window', 'service_id', 'start_date_time'),)

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    tenant_id: Mapped[UUID] = mapped_column(Uuid, nullable=False, index=True)
    owner_id: Mapped[UUID] = mapped_column(Uuid, nullable=False, index=True)
    service_id: Mapped[UUID] = mapped_column(Uuid, nullable=False)
    start_date_time: Mapped[datetime] = mapped_column(UtcDateTime, nullable=False)
    end_date_time: Mapped[datetime] = mapped_column(UtcDateTime, nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False)
    notes: Mapped[Optional[str]] = mapped_column(String(1000), nullable=True)
    created_at: Mapped[datetime] = mapped_column(UtcDateTime, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(UtcDateTime, nullable=False)
