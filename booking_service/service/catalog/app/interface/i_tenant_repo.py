from booking_service.service.catalog.app.interface.i_replica_repo import IReplicaRepo
from booking_service.service.catalog.domain.entity.tenant_entity import Tenant


class ITenantRepo(IReplicaRepo[Tenant]):
    pass
