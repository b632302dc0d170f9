from datetime import datetime
from typing import Protocol, runtime_checkable


@runtime_checkable
class Timestamped(Protocol):
    """Entities the store stamps with created/updated times on save."""

    created_at: datetime | None
    updated_at: datetime | None

    def mark_created(self, now: datetime) -> None: ...

    def mark_updated(self, now: datetime) -> None: ...


class TimestampedMixin:
    """Default Timestamped behavior; the entity declares both fields itself."""

    created_at: datetime | None
    updated_at: datetime | None

    def mark_created(self, now: datetime) -> None:
        self.created_at = now
        self.updated_at = now

    def mark_updated(self, now: datetime) -> None:
        # created_at is owned by the first save and never rewritten
        self.updated_at = now
