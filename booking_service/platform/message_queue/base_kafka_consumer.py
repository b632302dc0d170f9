"""
Base Kafka stream consumer.

One consumer owns one topic and one consumer group and processes messages
strictly one at a time, which keeps per-key order within a partition.

States::

    CONNECTING ──ok──> SUBSCRIBED ──> POLLING ⇄ PROCESSING
        ^   │
        └───┘ connect failure: wait reconnect backoff, retry until cancelled

Offsets are committed synchronously and only after the handler returns, so
every handled message is delivered at least once. A handler exception or a
fatal client error leaves the offset uncommitted and escapes ``run()``;
whoever supervises the consumer decides whether to start it again.

Cancellation abandons a connect check or poll that is still blocked in its
worker thread. The underlying client is then closed by that thread once the
call returns, never concurrently with it.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable
from enum import StrEnum
from functools import partial
import threading
from typing import Any, Generic, TypeVar

import anyio
from confluent_kafka import Consumer, KafkaError, KafkaException, Message
from opentelemetry import trace

from booking_service.platform.config.core_setting import settings
from booking_service.platform.logging.loguru_io import Logger
from booking_service.platform.message_queue.event_decoder import (
    EventDecoder,
    MalformedMessageError,
    UnknownEvent,
)


_T = TypeVar('_T')
_R = TypeVar('_R')

CONNECT_CHECK_TIMEOUT_SECONDS = 10


class ConsumerState(StrEnum):
    IDLE = 'idle'
    CONNECTING = 'connecting'
    SUBSCRIBED = 'subscribed'
    POLLING = 'polling'
    PROCESSING = 'processing'
    STOPPED = 'stopped'


class _ConsumerSession:
    """
    A client plus the bookkeeping that keeps ``close()`` off a busy client.

    Blocking calls run in worker threads. ``close()`` during a call marks the
    client for closing and the worker closes it when the call returns.
    """

    def __init__(self, client: Any, *, on_close: Callable[[Any], None]) -> None:
        self.client = client
        self._on_close = on_close
        self._lock = threading.Lock()
        self._busy = False
        self._closed = False
        self._close_pending = False

    def _invoke(self, func: Callable[[], _R]) -> _R:
        with self._lock:
            if self._closed:
                raise RuntimeError('Consumer session already closed')
            self._busy = True
        try:
            return func()
        finally:
            with self._lock:
                self._busy = False
                close_now = self._close_pending
            if close_now:
                self._on_close(self.client)

    async def call(self, func: Callable[[], _R], *, abandon_on_cancel: bool = True) -> _R:
        return await anyio.to_thread.run_sync(
            self._invoke, func, abandon_on_cancel=abandon_on_cancel
        )

    def close(self) -> None:
        with self._lock:
            if self._closed:
                return
            self._closed = True
            if self._busy:
                self._close_pending = True
                return
        self._on_close(self.client)


class BaseKafkaConsumer(ABC, Generic[_T]):
    def __init__(
        self,
        *,
        name: str,
        topic: str,
        group_id: str,
        decoder: EventDecoder[_T],
        consumer_factory: Callable[[dict], Any] = Consumer,
        poll_timeout_seconds: float | None = None,
        reconnect_backoff_seconds: float | None = None,
    ) -> None:
        self.name = name
        self.topic = topic
        self.group_id = group_id
        self.decoder = decoder
        self.consumer_factory = consumer_factory
        self.poll_timeout_seconds = (
            poll_timeout_seconds or settings.KAFKA_CONSUMER_POLL_TIMEOUT_SECONDS
        )
        self.reconnect_backoff_seconds = (
            reconnect_backoff_seconds or settings.KAFKA_CONSUMER_RECONNECT_BACKOFF_SECONDS
        )
        self.state = ConsumerState.IDLE
        self.committed_count = 0
        self.tracer = trace.get_tracer(__name__)

    @abstractmethod
    async def handle(self, event: _T) -> None:
        """Apply one decoded event. Raising leaves the message uncommitted."""
        pass

    def _consumer_config(self) -> dict:
        return settings.kafka_consumer_config(group_id=self.group_id)

    async def _connect(self) -> _ConsumerSession:
        while True:
            self.state = ConsumerState.CONNECTING
            session: _ConsumerSession | None = None
            try:
                client = self.consumer_factory(self._consumer_config())
                session = _ConsumerSession(client, on_close=self._close)
                client.subscribe([self.topic])
                # Forces a broker round-trip so an unreachable cluster fails here
                await session.call(
                    partial(
                        client.list_topics, topic=self.topic, timeout=CONNECT_CHECK_TIMEOUT_SECONDS
                    )
                )
            except KafkaException as e:
                Logger.base.warning(
                    f'[{self.name}] Cannot connect to Kafka: {e}, '
                    f'retry in {self.reconnect_backoff_seconds}s'
                )
                if session is not None:
                    session.close()
                await anyio.sleep(self.reconnect_backoff_seconds)
                continue
            except BaseException:
                if session is not None:
                    session.close()
                raise

            self.state = ConsumerState.SUBSCRIBED
            Logger.base.info(f'[{self.name}] Subscribed | topic={self.topic} group={self.group_id}')
            return session

    async def run(self) -> None:
        """Consume until cancelled, until a handler raises or the client fails fatally."""
        session = await self._connect()
        try:
            while True:
                self.state = ConsumerState.POLLING
                msg = await session.call(partial(session.client.poll, self.poll_timeout_seconds))
                if msg is None:
                    continue

                if error := msg.error():
                    if error.fatal():
                        Logger.base.error(f'[{self.name}] Fatal Kafka error: {error}')
                        raise KafkaException(error)
                    if error.code() != KafkaError._PARTITION_EOF:
                        Logger.base.error(f'[{self.name}] Kafka error: {error}')
                    continue

                self.state = ConsumerState.PROCESSING
                await self._process_message(session, msg)
        finally:
            self.state = ConsumerState.STOPPED
            session.close()

    async def _process_message(self, session: _ConsumerSession, msg: Message) -> None:
        position = f'{msg.topic()}[{msg.partition()}]@{msg.offset()}'
        try:
            event = self.decoder.decode(msg.value())
        except MalformedMessageError as e:
            Logger.base.warning(f'[{self.name}] Skipping malformed message {position}: {e}')
            return

        if isinstance(event, UnknownEvent):
            Logger.base.warning(
                f'[{self.name}] Unknown event type {event.event_type!r} at {position}, skipping'
            )
            await self._commit(session, msg)
            return

        with self.tracer.start_as_current_span(
            f'consumer.{self.topic}',
            attributes={
                'messaging.system': 'kafka',
                'messaging.destination': self.topic,
                'messaging.kafka.partition': msg.partition(),
                'messaging.kafka.offset': msg.offset(),
                'event.type': getattr(event, 'event_type', type(event).__name__),
            },
        ):
            try:
                await self.handle(event)
            except Exception as e:
                Logger.base.error(f'[{self.name}] Handler failed for {position}: {e}')
                raise

        await self._commit(session, msg)

    async def _commit(self, session: _ConsumerSession, msg: Message) -> None:
        # A handled message's commit runs to completion even when stopping
        await session.call(
            partial(session.client.commit, message=msg, asynchronous=False),
            abandon_on_cancel=False,
        )
        self.committed_count += 1

    def _close(self, client: Any) -> None:
        try:
            client.close()
        except (KafkaException, RuntimeError) as e:
            Logger.base.warning(f'[{self.name}] Close error: {e}')
