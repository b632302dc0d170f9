"""
Availability gRPC Client

Unary call to availability.AvailabilityService/CheckTimeSlotAvailability over a
grpc.aio channel. Every call carries a deadline; transport failures of any
kind surface as ServiceUnavailableError with a message safe to show users.
"""

from datetime import datetime, timezone
from typing import Any
from uuid import UUID

import grpc
from opentelemetry import trace

from booking_service.platform.config.core_setting import settings
from booking_service.platform.exception.exceptions import ServiceUnavailableError
from booking_service.platform.logging.loguru_io import Logger
from booking_service.service.booking.app.dto.availability_dto import (
    AvailabilityCheckResult,
    ConflictType,
    SlotConflict,
)
from booking_service.service.booking.app.interface.i_availability_client import (
    IAvailabilityClient,
)
from booking_service.service.booking.driven_adapter.rpc import availability_pb


_CONFLICT_TYPES: dict[int, ConflictType] = {
    availability_pb.CONFLICT_TYPE_NAMES.index('TIME_BLOCK'): ConflictType.TIME_BLOCK,
    availability_pb.CONFLICT_TYPE_NAMES.index('WORKING_HOURS'): ConflictType.WORKING_HOURS,
    availability_pb.CONFLICT_TYPE_NAMES.index('BOOKING'): ConflictType.BOOKING,
    availability_pb.CONFLICT_TYPE_NAMES.index('BUFFER_TIME'): ConflictType.BUFFER_TIME,
}

_RPC_ERROR_MESSAGES: dict[grpc.StatusCode, str] = {
    grpc.StatusCode.DEADLINE_EXCEEDED: (
        'Availability service is temporarily unavailable. Please try again later.'
    ),
    grpc.StatusCode.UNAVAILABLE: (
        'Availability service is currently unavailable. Please try again later.'
    ),
}
_RPC_ERROR_DEFAULT_MESSAGE = (
    'Error communicating with availability service. Please try again later.'
)
_UNEXPECTED_ERROR_MESSAGE = (
    'An unexpected error occurred while checking availability. Please try again later.'
)


def map_conflict_type(value: int) -> ConflictType:
    return _CONFLICT_TYPES.get(value, ConflictType.UNSPECIFIED)


def _to_utc(dt: datetime) -> datetime:
    return dt.replace(tzinfo=timezone.utc) if dt.tzinfo is None else dt.astimezone(timezone.utc)


class AvailabilityGrpcClient(IAvailabilityClient):
    """The channel is opened on the first check, so an unused client holds no connection."""

    def __init__(
        self,
        *,
        target: str | None = None,
        timeout_seconds: float | None = None,
        channel: Any = None,
    ) -> None:
        self.target = target or settings.AVAILABILITY_GRPC_URL
        self.timeout_seconds = timeout_seconds or settings.AVAILABILITY_RPC_TIMEOUT_SECONDS
        self.channel = channel
        self._check_time_slot: Any = None
        self.tracer = trace.get_tracer(__name__)

    def _time_slot_rpc(self) -> Any:
        if self._check_time_slot is None:
            if self.channel is None:
                self.channel = grpc.aio.insecure_channel(
                    self.target,
                    options=[
                        ('grpc.keepalive_time_ms', 30000),
                        ('grpc.max_connection_idle_ms', 30000),
                    ],
                )
                Logger.base.info(f'Availability gRPC channel opened to {self.target}')
            self._check_time_slot = self.channel.unary_unary(
                availability_pb.CHECK_TIME_SLOT_AVAILABILITY_METHOD,
                request_serializer=availability_pb.TimeSlotRequest.SerializeToString,
                response_deserializer=availability_pb.TimeSlotResponse.FromString,
            )
        return self._check_time_slot

    @Logger.io
    async def check_availability(
        self,
        *,
        tenant_id: UUID,
        service_id: UUID,
        start: datetime,
        end: datetime,
    ) -> AvailabilityCheckResult:
        request = availability_pb.TimeSlotRequest(
            tenant_id=str(tenant_id),
            service_id=str(service_id),
        )
        request.start_time.FromDatetime(_to_utc(start))
        request.end_time.FromDatetime(_to_utc(end))

        with self.tracer.start_as_current_span(
            'grpc.availability.check_time_slot',
            attributes={
                'rpc.system': 'grpc',
                'rpc.service': 'availability.AvailabilityService',
                'rpc.method': 'CheckTimeSlotAvailability',
                'tenant.id': str(tenant_id),
                'service.id': str(service_id),
            },
        ):
            try:
                response = await self._time_slot_rpc()(request, timeout=self.timeout_seconds)
            except grpc.RpcError as e:
                code = e.code() if callable(getattr(e, 'code', None)) else None
                Logger.base.error(f'Availability RPC failed with status {code}: {e}')
                raise ServiceUnavailableError(
                    _RPC_ERROR_MESSAGES.get(code, _RPC_ERROR_DEFAULT_MESSAGE)  # type: ignore[arg-type]
                ) from e
            except Exception as e:
                Logger.base.exception(f'Unexpected error checking availability: {e}')
                raise ServiceUnavailableError(_UNEXPECTED_ERROR_MESSAGE) from e

        result = AvailabilityCheckResult(
            is_available=response.is_available,
            conflicts=tuple(
                SlotConflict(
                    type=map_conflict_type(conflict.type),
                    overlap_start=conflict.overlap_start.ToDatetime(tzinfo=timezone.utc),
                    overlap_end=conflict.overlap_end.ToDatetime(tzinfo=timezone.utc),
                )
                for conflict in response.conflicts
            ),
        )
        if not result.is_available:
            Logger.base.warning(
                f'Time slot not available for service {service_id}, '
                f'conflicts: {len(result.conflicts)}'
            )
        return result

    async def close(self) -> None:
        if self.channel is None:
            return
        channel, self.channel, self._check_time_slot = self.channel, None, None
        await channel.close()
