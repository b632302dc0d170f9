"""
Event replicator: runs and supervises the replication consumers.

Each consumer runs in its own task inside one anyio task group. When a
consumer's run() raises, the supervisor logs it, waits an exponentially
growing backoff and starts the consumer again from CONNECTING. The new
session resumes from the last committed offset, so the message whose handler
failed is delivered again. ``stop()`` cancels the whole group.
"""

from collections.abc import Sequence

import anyio

from booking_service.platform.config.core_setting import settings
from booking_service.platform.logging.loguru_io import Logger
from booking_service.platform.message_queue.base_kafka_consumer import BaseKafkaConsumer


class EventReplicator:
    def __init__(
        self,
        *,
        consumers: Sequence[BaseKafkaConsumer],
        restart_backoff_seconds: float | None = None,
        restart_backoff_max_seconds: float | None = None,
    ) -> None:
        self.consumers = list(consumers)
        self.restart_backoff_seconds = (
            restart_backoff_seconds or settings.KAFKA_CONSUMER_RESTART_BACKOFF_SECONDS
        )
        self.restart_backoff_max_seconds = (
            restart_backoff_max_seconds or settings.KAFKA_CONSUMER_RESTART_BACKOFF_MAX_SECONDS
        )
        self.restart_counts: dict[str, int] = {consumer.name: 0 for consumer in self.consumers}
        self._cancel_scope: anyio.CancelScope | None = None
        self._stop_requested = False

    async def run(self) -> None:
        """Run every consumer until stop() is called."""
        if self._stop_requested:
            return
        Logger.base.info(
            f'[REPLICATOR] Starting {len(self.consumers)} consumers: '
            f'{[consumer.name for consumer in self.consumers]}'
        )
        async with anyio.create_task_group() as tg:
            self._cancel_scope = tg.cancel_scope
            for consumer in self.consumers:
                tg.start_soon(self._supervise, consumer, name=f'replicator:{consumer.name}')
        self._cancel_scope = None
        Logger.base.info('[REPLICATOR] Stopped')

    def stop(self) -> None:
        self._stop_requested = True
        if self._cancel_scope is not None:
            self._cancel_scope.cancel()

    async def _supervise(self, consumer: BaseKafkaConsumer) -> None:
        backoff = self.restart_backoff_seconds
        while True:
            committed_before = consumer.committed_count
            try:
                await consumer.run()
                return
            except Exception as e:
                if consumer.committed_count > committed_before:
                    # The session made progress; the failure is not a crash loop
                    backoff = self.restart_backoff_seconds
                self.restart_counts[consumer.name] += 1
                Logger.base.error(
                    f'[REPLICATOR] {consumer.name} stopped with {type(e).__name__}: {e}; '
                    f'restart #{self.restart_counts[consumer.name]} in {backoff}s'
                )
                await anyio.sleep(backoff)
                backoff = min(backoff * 2, self.restart_backoff_max_seconds)
