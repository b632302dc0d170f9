from datetime import datetime
from uuid import UUID

import attrs

from booking_service.service.shared_kernel.domain.capability.timestamped import TimestampedMixin


@attrs.define
class Category(TimestampedMixin):
    id: UUID
    tenant_id: UUID
    name: str
    created_at: datetime | None = None
    updated_at: datetime | None = None
