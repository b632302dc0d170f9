"""Availability check result DTO."""

from datetime import datetime
from enum import StrEnum

import attrs


class ConflictType(StrEnum):
    UNSPECIFIED = 'Unspecified'
    TIME_BLOCK = 'TimeBlock'
    WORKING_HOURS = 'WorkingHours'
    BOOKING = 'Booking'
    BUFFER_TIME = 'BufferTime'


@attrs.define(frozen=True)
class SlotConflict:
    type: ConflictType
    overlap_start: datetime
    overlap_end: datetime

    def describe(self) -> str:
        return f'{self.type}: {self.overlap_start:%H:%M} - {self.overlap_end:%H:%M}'


@attrs.define(frozen=True)
class AvailabilityCheckResult:
    """
    Answer of the availability service for one requested window.

    conflicts keeps the order the remote service reported them in.
    """

    is_available: bool
    conflicts: tuple[SlotConflict, ...] = ()

    def unavailable_message(self) -> str:
        if not self.conflicts:
            return 'The requested time slot is not available'
        details = ', '.join(conflict.describe() for conflict in self.conflicts)
        return f'The requested time slot is not available due to the following conflicts: {details}'
