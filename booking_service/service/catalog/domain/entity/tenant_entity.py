from datetime import datetime
from uuid import UUID

import attrs

from booking_service.service.shared_kernel.domain.capability.timestamped import TimestampedMixin


DEFAULT_TIME_ZONE = 'UTC'


@attrs.define
class Tenant(TimestampedMixin):
    id: UUID
    business_name: str
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    # Not carried by tenant events; configured locally and kept across updates
    time_zone: str = DEFAULT_TIME_ZONE
    created_at: datetime | None = None
    updated_at: datetime | None = None
