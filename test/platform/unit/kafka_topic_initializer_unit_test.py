"""
Unit tests for KafkaTopicInitializer

Test Focus:
1. Only missing outbound topics are created, with the configured partitions
2. A concurrent creation (TOPIC_ALREADY_EXISTS) counts as success
3. Broker errors are reported as False, never raised
"""

from concurrent.futures import Future
from types import SimpleNamespace

from confluent_kafka import KafkaError, KafkaException
import pytest

from booking_service.platform.message_queue.kafka_topic_initializer import KafkaTopicInitializer


class FakeAdminClient:
    def __init__(
        self,
        *,
        existing: set[str] | None = None,
        create_error: KafkaError | None = None,
        list_error: KafkaException | None = None,
    ) -> None:
        self.existing = existing or set()
        self.create_error = create_error
        self.list_error = list_error
        self.created: list = []

    def list_topics(self, timeout: float = -1) -> SimpleNamespace:
        if self.list_error is not None:
            raise self.list_error
        return SimpleNamespace(topics={topic: object() for topic in self.existing})

    def create_topics(self, new_topics: list, request_timeout: float = -1) -> dict[str, Future]:
        self.created.extend(new_topics)
        futures = {}
        for new_topic in new_topics:
            future: Future = Future()
            if self.create_error is not None:
                future.set_exception(KafkaException(self.create_error))
            else:
                future.set_result(None)
            futures[new_topic.topic] = future
        return futures


@pytest.mark.unit
class TestKafkaTopicInitializer:
    def test_creates_missing_booking_events_topic(self):
        admin = FakeAdminClient(existing={'tenant-events'})
        initializer = KafkaTopicInitializer(admin_client=admin, partitions=6, replication_factor=1)

        assert initializer.ensure_topics_exist() is True

        assert [topic.topic for topic in admin.created] == ['booking-events']
        assert admin.created[0].num_partitions == 6

    def test_existing_topic_is_left_alone(self):
        admin = FakeAdminClient(existing={'booking-events'})

        assert KafkaTopicInitializer(admin_client=admin).ensure_topics_exist() is True
        assert admin.created == []

    def test_topic_created_concurrently_counts_as_success(self):
        admin = FakeAdminClient(create_error=KafkaError(KafkaError.TOPIC_ALREADY_EXISTS))

        assert KafkaTopicInitializer(admin_client=admin).ensure_topics_exist() is True

    def test_creation_failure_returns_false(self):
        admin = FakeAdminClient(create_error=KafkaError(KafkaError.POLICY_VIOLATION))

        assert KafkaTopicInitializer(admin_client=admin).ensure_topics_exist() is False

    def test_unreachable_broker_returns_false(self):
        admin = FakeAdminClient(list_error=KafkaException(KafkaError(KafkaError._TRANSPORT)))

        assert KafkaTopicInitializer(admin_client=admin).ensure_topics_exist() is False
        assert admin.created == []
