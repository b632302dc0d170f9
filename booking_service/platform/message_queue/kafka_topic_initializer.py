"""
Kafka Topic Initializer

Creates the outbound booking-events topic at startup using confluent-kafka
AdminClient. Inbound topics are owned by the upstream services and are only
subscribed to, never created here.
"""

from confluent_kafka import KafkaError, KafkaException
from confluent_kafka.admin import AdminClient, NewTopic

from booking_service.platform.config.core_setting import settings
from booking_service.platform.logging.loguru_io import Logger
from booking_service.platform.message_queue.kafka_constant_builder import KafkaTopicBuilder


class KafkaTopicInitializer:
    def __init__(
        self,
        *,
        admin_client: AdminClient | None = None,
        partitions: int | None = None,
        replication_factor: int | None = None,
    ) -> None:
        self.admin_client = admin_client or AdminClient(
            {'bootstrap.servers': settings.KAFKA_BOOTSTRAP_SERVERS, **settings.KAFKA_SECURITY_CONFIG}
        )
        self.partitions = partitions or settings.KAFKA_BOOKING_EVENTS_PARTITIONS
        self.replication_factor = replication_factor or settings.KAFKA_REPLICATION_FACTOR

    def ensure_topics_exist(self) -> bool:
        """
        Ensure the outbound topics exist, creating them if needed.

        Returns:
            bool: True if all topics exist or were created successfully
        """
        required_topics = KafkaTopicBuilder.get_outbound_topics()
        try:
            existing_topics = set(self.admin_client.list_topics(timeout=10).topics.keys())
        except KafkaException as e:
            Logger.base.error(f'[TOPIC-INIT] Could not list topics: {e}')
            return False

        topics_to_create = [topic for topic in required_topics if topic not in existing_topics]
        if not topics_to_create:
            Logger.base.info(f'[TOPIC-INIT] All {len(required_topics)} topics already exist')
            return True

        new_topics = [
            NewTopic(
                topic=topic,
                num_partitions=self.partitions,
                replication_factor=self.replication_factor,
                config={
                    'cleanup.policy': 'delete',
                    'retention.ms': '604800000',  # 7 days
                },
            )
            for topic in topics_to_create
        ]
        futures = self.admin_client.create_topics(new_topics, request_timeout=30)

        success_count = 0
        for topic, future in futures.items():
            try:
                future.result()
                Logger.base.info(f'[TOPIC-INIT] Created topic: {topic}')
                success_count += 1
            except KafkaException as e:
                # Another replica may have created it concurrently
                if e.args[0].code() == KafkaError.TOPIC_ALREADY_EXISTS:
                    Logger.base.info(f'[TOPIC-INIT] Topic already exists: {topic}')
                    success_count += 1
                else:
                    Logger.base.error(f'[TOPIC-INIT] Failed to create {topic}: {e}')

        return success_count == len(topics_to_create)
