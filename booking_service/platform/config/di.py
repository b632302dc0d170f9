"""
https://python-dependency-injector.ets-labs.org/index.html
"""

from dependency_injector import containers, providers

from booking_service.platform.database.orm_db_setting import Database
from booking_service.service.booking.app.command.cancel_booking_use_case import (
    CancelBookingUseCase,
)
from booking_service.service.booking.app.command.create_booking_use_case import (
    CreateBookingUseCase,
)
from booking_service.service.booking.app.query.get_booking_use_case import GetBookingUseCase
from booking_service.service.booking.app.query.list_bookings_use_case import ListBookingsUseCase
from booking_service.service.booking.driven_adapter.message_queue.booking_event_publisher_impl import (
    BookingEventPublisherImpl,
)
from booking_service.service.booking.driven_adapter.repo.booking_repo_impl import BookingRepoImpl
from booking_service.service.booking.driven_adapter.rpc.availability_grpc_client import (
    AvailabilityGrpcClient,
)
from booking_service.service.catalog.app.command.replicate_service_catalog_event_use_case import (
    ReplicateServiceCatalogEventUseCase,
)
from booking_service.service.catalog.app.command.replicate_tenant_event_use_case import (
    ReplicateTenantEventUseCase,
)
from booking_service.service.catalog.driven_adapter.repo.replica_repo_impl import (
    CategoryRepoImpl,
    ServiceRepoImpl,
    TenantRepoImpl,
)
from booking_service.service.catalog.driving_adapter.mq_consumer.catalog_mq_consumer import (
    ServiceCatalogEventConsumer,
    TenantEventConsumer,
)
from booking_service.service.catalog.driving_adapter.mq_consumer.event_replicator import (
    EventReplicator,
)


class Container(containers.DeclarativeContainer):
    database = providers.Singleton(Database)

    # Repositories (replicas are written only by the replicator)
    booking_repo = providers.Singleton(BookingRepoImpl, database=database)
    service_repo = providers.Singleton(ServiceRepoImpl, database=database)
    category_repo = providers.Singleton(CategoryRepoImpl, database=database)
    tenant_repo = providers.Singleton(TenantRepoImpl, database=database)

    # Outbound adapters
    availability_client = providers.Singleton(AvailabilityGrpcClient)
    booking_event_publisher = providers.Singleton(BookingEventPublisherImpl)

    # Booking use cases
    create_booking_use_case = providers.Factory(
        CreateBookingUseCase,
        booking_repo=booking_repo,
        service_repo=service_repo,
        availability_client=availability_client,
        event_publisher=booking_event_publisher,
    )
    get_booking_use_case = providers.Factory(GetBookingUseCase, booking_repo=booking_repo)
    list_bookings_use_case = providers.Factory(ListBookingsUseCase, booking_repo=booking_repo)
    cancel_booking_use_case = providers.Factory(
        CancelBookingUseCase,
        booking_repo=booking_repo,
        event_publisher=booking_event_publisher,
    )

    # Replication
    replicate_tenant_event_use_case = providers.Factory(
        ReplicateTenantEventUseCase, tenant_repo=tenant_repo
    )
    replicate_service_catalog_event_use_case = providers.Factory(
        ReplicateServiceCatalogEventUseCase,
        service_repo=service_repo,
        category_repo=category_repo,
    )
    tenant_event_consumer = providers.Singleton(
        TenantEventConsumer, replicate_tenant_event=replicate_tenant_event_use_case
    )
    service_catalog_event_consumer = providers.Singleton(
        ServiceCatalogEventConsumer,
        replicate_service_catalog_event=replicate_service_catalog_event_use_case,
    )
    event_replicator = providers.Singleton(
        EventReplicator,
        consumers=providers.List(tenant_event_consumer, service_catalog_event_consumer),
    )


container = Container()
