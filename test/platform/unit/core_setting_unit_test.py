"""Unit tests for Settings validation and derived database and Kafka configuration"""

from pydantic import SecretStr
from pydantic import ValidationError as PydanticValidationError
import pytest

from booking_service.platform.config.core_setting import Settings


@pytest.mark.unit
class TestSettings:
    @pytest.mark.parametrize(
        'raw, expected',
        [
            ('availability:5001', 'availability:5001'),
            ('http://availability:5001', 'availability:5001'),
            ('https://availability.internal:443', 'availability.internal:443'),
            ('  localhost:5001  ', 'localhost:5001'),
        ],
    )
    def test_availability_url_is_grpc_target(self, raw, expected):
        assert Settings(AVAILABILITY_GRPC_URL=raw).AVAILABILITY_GRPC_URL == expected

    def test_blank_availability_url_is_rejected(self):
        with pytest.raises(PydanticValidationError):
            Settings(AVAILABILITY_GRPC_URL='   ')

    def test_database_url_uses_asyncpg(self):
        settings = Settings(
            POSTGRES_SERVER='db',
            POSTGRES_PORT=6543,
            POSTGRES_USER='booking',
            POSTGRES_PASSWORD=SecretStr('pw'),
            POSTGRES_DB='bookings',
        )

        assert settings.DATABASE_URL_ASYNC == 'postgresql+asyncpg://booking:pw@db:6543/bookings'

    def test_plaintext_without_credentials(self):
        config = Settings(KAFKA_SASL_PASSWORD=SecretStr('')).KAFKA_PRODUCER_CONFIG

        assert config['security.protocol'] == 'PLAINTEXT'
        assert 'sasl.password' not in config
        assert config['acks'] == 'all'
        assert config['enable.idempotence'] is True

    def test_credentials_enable_sasl(self):
        settings = Settings(
            KAFKA_SASL_USERNAME='booking',
            KAFKA_SASL_PASSWORD=SecretStr('s3cret'),
        )

        config = settings.kafka_consumer_config(group_id='booking-service-tenant-events')

        assert config['security.protocol'] == 'SASL_SSL'
        assert config['sasl.username'] == 'booking'
        assert config['sasl.password'] == 's3cret'
        assert config['group.id'] == 'booking-service-tenant-events'
        assert config['enable.auto.commit'] is False
