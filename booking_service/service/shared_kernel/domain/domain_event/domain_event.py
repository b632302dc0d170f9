"""
Event envelope shared by every message this service produces or consumes.

On the wire every event is a flat JSON object in camelCase:
``{"eventId": ..., "eventType": "BookingCreatedEvent", "timestamp": ..., <payload>}``.
``eventType`` is the discriminator; each concrete event pins it with a
``Literal`` so pydantic can pick the variant from a union.
"""

from datetime import datetime, timezone
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from uuid_utils.compat import uuid7


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class DomainEvent(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra='ignore',
    )

    event_id: UUID = Field(default_factory=uuid7)
    event_type: str
    timestamp: datetime = Field(default_factory=utc_now)

    def to_wire(self) -> dict:
        return self.model_dump(mode='json', by_alias=True)
