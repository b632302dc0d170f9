"""
Test Configuration and Fixtures

Environment setup must happen before any application import: settings and
the loguru sinks are configured at import time.
"""

import os
from pathlib import Path


def _early_setup_test_environment() -> None:
    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)
    os.environ.setdefault('SERVICE_NAME', 'booking-service-test')
    os.environ.setdefault('AVAILABILITY_GRPC_URL', 'localhost:5001')


_early_setup_test_environment()

# ruff: noqa: E402
from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from uuid import UUID

import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import NullPool

from booking_service.platform.database.orm_db_setting import Base, Database

# Registers the tables on Base.metadata
from booking_service.service.booking.driven_adapter.repo import booking_model  # noqa: F401
from booking_service.service.catalog.driven_adapter.repo import replica_model  # noqa: F401
from booking_service.service.catalog.domain.entity.service_entity import Service
from booking_service.service.shared_kernel.domain.value_object.user_context import (
    UserContext,
    UserRole,
)


TENANT_A = UUID('11111111-1111-1111-1111-111111111111')
TENANT_B = UUID('22222222-2222-2222-2222-222222222222')
CUSTOMER_ID = UUID('aaaaaaaa-aaaa-aaaa-aaaa-aaaaaaaaaaaa')
OTHER_CUSTOMER_ID = UUID('bbbbbbbb-bbbb-bbbb-bbbb-bbbbbbbbbbbb')
PROVIDER_ID = UUID('cccccccc-cccc-cccc-cccc-cccccccccccc')
SERVICE_ID = UUID('5e5e5e5e-5e5e-5e5e-5e5e-5e5e5e5e5e5e')


@pytest.fixture
def now() -> datetime:
    return datetime(2030, 1, 15, 8, 0, tzinfo=timezone.utc)


@pytest.fixture
def future_start(now: datetime) -> datetime:
    return now + timedelta(days=1, hours=2)


@pytest.fixture
def customer() -> UserContext:
    return UserContext(user_id=CUSTOMER_ID, role=UserRole.CUSTOMER, tenant_id=None)


@pytest.fixture
def other_customer() -> UserContext:
    return UserContext(user_id=OTHER_CUSTOMER_ID, role=UserRole.CUSTOMER, tenant_id=None)


@pytest.fixture
def provider() -> UserContext:
    return UserContext(user_id=PROVIDER_ID, role=UserRole.PROVIDER, tenant_id=TENANT_A)


@pytest.fixture
def active_service() -> Service:
    return Service(
        id=SERVICE_ID,
        tenant_id=TENANT_A,
        name='Haircut',
        description='Classic cut',
        price=Decimal('25.00'),
        duration_minutes=30,
        is_active=True,
    )


@pytest.fixture
def tenant_id() -> UUID:
    return TENANT_A


@pytest.fixture
def other_tenant_id() -> UUID:
    return TENANT_B


@pytest.fixture
def database_factory(tmp_path) -> Callable[[], Database]:
    """
    Opens SQLite-backed Database instances over one schema file.

    Each call is a fresh engine, like a restarted process pointing at the
    same database. Transactions start with BEGIN IMMEDIATE so concurrent
    writers queue up the way row locks make them on PostgreSQL.
    """
    db_path = tmp_path / 'booking_service.db'
    sync_engine = create_engine(f'sqlite:///{db_path}')
    Base.metadata.create_all(sync_engine)
    sync_engine.dispose()

    def open_database() -> Database:
        engine = create_async_engine(f'sqlite+aiosqlite:///{db_path}', poolclass=NullPool)

        @event.listens_for(engine.sync_engine, 'connect')
        def _disable_driver_begin(dbapi_connection, connection_record):
            dbapi_connection.isolation_level = None

        @event.listens_for(engine.sync_engine, 'begin')
        def _begin_immediate(conn):
            conn.exec_driver_sql('BEGIN IMMEDIATE')

        return Database(engine=engine)

    return open_database


@pytest.fixture
def database(database_factory: Callable[[], Database]) -> Database:
    return database_factory()
