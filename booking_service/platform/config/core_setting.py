from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from booking_service.platform.constant.path import PROJECT_ROOT


_ENV_PATH = PROJECT_ROOT / '.env'
_ENV_FILE = _ENV_PATH if _ENV_PATH.exists() else (PROJECT_ROOT / '.env.example')


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_ignore_empty=True,
        extra='ignore',
    )

    PROJECT_NAME: str = 'Booking Service'
    VERSION: str = '0.1.0'
    DEBUG: bool = True  # Set to False in production
    SERVICE_NAME: str = 'booking-service'

    # PostgreSQL
    POSTGRES_SERVER: str = 'localhost'
    POSTGRES_PORT: int = 5432
    POSTGRES_USER: str = 'postgres'
    POSTGRES_PASSWORD: SecretStr = SecretStr('postgres')
    POSTGRES_DB: str = 'booking_service'

    # Database Connection Pool
    DB_POOL_SIZE: int = 10
    DB_POOL_MAX_OVERFLOW: int = 5
    DB_POOL_TIMEOUT: int = 30
    DB_POOL_RECYCLE: int = 3600
    DB_POOL_PRE_PING: bool = True

    # Kafka Connection
    KAFKA_BOOTSTRAP_SERVERS: str = 'localhost:9092'
    KAFKA_SECURITY_PROTOCOL: str = 'PLAINTEXT'
    KAFKA_SASL_MECHANISM: str = 'PLAIN'
    KAFKA_SASL_USERNAME: str = ''
    KAFKA_SASL_PASSWORD: SecretStr = SecretStr('')
    KAFKA_CLIENT_ID: str = 'booking-service'

    # Kafka Producer
    KAFKA_ACKS: str = 'all'
    KAFKA_ENABLE_IDEMPOTENCE: bool = True
    KAFKA_MESSAGE_TIMEOUT_MS: int = 30000
    KAFKA_REQUEST_TIMEOUT_MS: int = 30000
    KAFKA_REPLICATION_FACTOR: int = 1  # Set to 1 for development, 3 for production
    KAFKA_BOOKING_EVENTS_PARTITIONS: int = 3

    # Kafka Consumer
    KAFKA_CONSUMER_GROUP_ID: str = 'booking-service'
    KAFKA_AUTO_OFFSET_RESET: str = 'earliest'
    KAFKA_CONSUMER_POLL_TIMEOUT_SECONDS: float = 1.0
    KAFKA_CONSUMER_RECONNECT_BACKOFF_SECONDS: float = 2.0
    KAFKA_CONSUMER_RESTART_BACKOFF_SECONDS: float = 1.0
    KAFKA_CONSUMER_RESTART_BACKOFF_MAX_SECONDS: float = 60.0

    # Kafka Topics
    KAFKA_BOOKING_EVENTS_TOPIC: str = 'booking-events'
    KAFKA_TENANT_EVENTS_TOPIC: str = 'tenant-events'
    KAFKA_SERVICE_CATALOG_EVENTS_TOPIC: str = 'service-catalog-events'

    # Availability Service (gRPC)
    AVAILABILITY_GRPC_URL: str = 'localhost:5001'
    AVAILABILITY_RPC_TIMEOUT_SECONDS: float = 5.0

    # Tracing
    OTEL_EXPORTER_OTLP_ENDPOINT: str = ''
    OTEL_CONSOLE_EXPORT: bool = False

    @field_validator('AVAILABILITY_GRPC_URL')
    @classmethod
    def require_availability_url(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError('AVAILABILITY_GRPC_URL must not be blank')
        # grpc targets are host:port, not URLs
        for scheme in ('http://', 'https://'):
            if v.startswith(scheme):
                return v[len(scheme) :]
        return v

    @property
    def DATABASE_URL_ASYNC(self) -> str:
        password = self.POSTGRES_PASSWORD.get_secret_value()
        return f'postgresql+asyncpg://{self.POSTGRES_USER}:{password}@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}'

    @property
    def KAFKA_SASL_ENABLED(self) -> bool:
        return bool(self.KAFKA_SASL_PASSWORD.get_secret_value())

    @property
    def KAFKA_SECURITY_CONFIG(self) -> dict:
        config: dict = {'security.protocol': self.KAFKA_SECURITY_PROTOCOL}
        if self.KAFKA_SASL_ENABLED:
            config |= {
                'security.protocol': 'SASL_SSL'
                if self.KAFKA_SECURITY_PROTOCOL == 'PLAINTEXT'
                else self.KAFKA_SECURITY_PROTOCOL,
                'sasl.mechanism': self.KAFKA_SASL_MECHANISM,
                'sasl.username': self.KAFKA_SASL_USERNAME,
                'sasl.password': self.KAFKA_SASL_PASSWORD.get_secret_value(),
            }
        return config

    @property
    def KAFKA_PRODUCER_CONFIG(self) -> dict:
        return {
            'bootstrap.servers': self.KAFKA_BOOTSTRAP_SERVERS,
            'client.id': self.KAFKA_CLIENT_ID,
            'acks': self.KAFKA_ACKS,
            'enable.idempotence': self.KAFKA_ENABLE_IDEMPOTENCE,
            'message.timeout.ms': self.KAFKA_MESSAGE_TIMEOUT_MS,
            'request.timeout.ms': self.KAFKA_REQUEST_TIMEOUT_MS,
            **self.KAFKA_SECURITY_CONFIG,
        }

    def kafka_consumer_config(self, *, group_id: str) -> dict:
        return {
            'bootstrap.servers': self.KAFKA_BOOTSTRAP_SERVERS,
            'client.id': self.KAFKA_CLIENT_ID,
            'group.id': group_id,
            'auto.offset.reset': self.KAFKA_AUTO_OFFSET_RESET,
            'enable.auto.commit': False,
            'session.timeout.ms': 30000,
            'heartbeat.interval.ms': 3000,
            **self.KAFKA_SECURITY_CONFIG,
        }


settings = Settings()  # type: ignore
