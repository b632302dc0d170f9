from booking_service.platform.config.core_setting import settings


class ServiceNames:
    """Service name constants"""

    BOOKING_SERVICE = 'booking-service'  # Booking lifecycle + booking-events producer
    TENANT_SERVICE = 'tenant-service'  # Upstream owner of tenants
    SERVICE_CATALOG_SERVICE = 'service-catalog-service'  # Upstream owner of services/categories


class KafkaTopicBuilder:
    """
    Kafka topic names shared with the upstream and downstream services.

    Names are configurable per environment; defaults are
    booking-events, tenant-events and service-catalog-events.
    """

    @staticmethod
    def booking_events() -> str:
        """Outbound: BookingCreatedEvent / BookingCancelledEvent, keyed by booking id"""
        return settings.KAFKA_BOOKING_EVENTS_TOPIC

    @staticmethod
    def tenant_events() -> str:
        """Inbound from tenant-service"""
        return settings.KAFKA_TENANT_EVENTS_TOPIC

    @staticmethod
    def service_catalog_events() -> str:
        """Inbound from service-catalog-service (services and categories)"""
        return settings.KAFKA_SERVICE_CATALOG_EVENTS_TOPIC

    @staticmethod
    def get_outbound_topics() -> list[str]:
        return [KafkaTopicBuilder.booking_events()]


class KafkaConsumerGroupBuilder:
    """
    Kafka Consumer Group Naming Unified Builder

    Format: {base_group_id}-{topic}
    """

    @staticmethod
    def tenant_events() -> str:
        return f'{settings.KAFKA_CONSUMER_GROUP_ID}-{KafkaTopicBuilder.tenant_events()}'

    @staticmethod
    def service_catalog_events() -> str:
        return f'{settings.KAFKA_CONSUMER_GROUP_ID}-{KafkaTopicBuilder.service_catalog_events()}'
