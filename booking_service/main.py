"""
Booking Service process entry point.

Runs the event replicator until SIGINT/SIGTERM and owns the lifecycle of the
database engine, the shared Kafka producer and the availability gRPC channel.
Callers of the booking use cases resolve them from the same container.

Usage:
    python -m booking_service.main
"""

from collections.abc import Awaitable, Callable
import signal

import anyio

from booking_service.platform.config.core_setting import settings
from booking_service.platform.config.di import container
from booking_service.platform.logging.loguru_io import Logger
from booking_service.platform.message_queue.event_publisher import close_producer
from booking_service.platform.message_queue.kafka_topic_initializer import KafkaTopicInitializer
from booking_service.platform.observability.tracing import TracingConfig


async def _stop_on_signal(replicator_stop: Callable[[], None]) -> None:
    with anyio.open_signal_receiver(signal.SIGINT, signal.SIGTERM) as signals:
        async for signum in signals:
            Logger.base.info(f'[Booking Service] Received {signal.Signals(signum).name}, stopping')
            replicator_stop()
            return


async def _release(name: str, close: Callable[[], Awaitable[None]]) -> None:
    try:
        await close()
        Logger.base.info(f'[Booking Service] {name} closed')
    except Exception as e:
        Logger.base.error(f'[Booking Service] Failed to close {name}: {e}')


async def serve() -> None:
    Logger.base.info(f'[Booking Service] Starting {settings.PROJECT_NAME} v{settings.VERSION}')

    tracing = TracingConfig()
    tracing.setup()

    database = container.database()
    availability_client = container.availability_client()
    try:
        await database.create_tables()

        if not await anyio.to_thread.run_sync(KafkaTopicInitializer().ensure_topics_exist):
            Logger.base.warning('[Booking Service] Outbound topics not confirmed, continuing')

        replicator = container.event_replicator()
        async with anyio.create_task_group() as tg:
            tg.start_soon(_stop_on_signal, replicator.stop)
            await replicator.run()
            tg.cancel_scope.cancel()
    finally:
        with anyio.CancelScope(shield=True):
            await _release('Kafka producer', close_producer)
            await _release('Availability client', availability_client.close)
            await _release('Database engine', database.dispose)
            tracing.shutdown()
            Logger.base.info('[Booking Service] Shutdown complete')


def main() -> None:
    anyio.run(serve)


if __name__ == '__main__':
    main()
