from datetime import datetime
from decimal import Decimal
from uuid import UUID

import attrs

from booking_service.service.shared_kernel.domain.capability.timestamped import TimestampedMixin


@attrs.define
class Service(TimestampedMixin):
    """Local replica of a bookable service owned by service-catalog-service."""

    id: UUID
    tenant_id: UUID
    name: str
    duration_minutes: int
    price: Decimal = Decimal('0')
    description: str | None = None
    category_id: UUID | None = None
    is_active: bool = True
    created_at: datetime | None = None
    updated_at: datetime | None = None
