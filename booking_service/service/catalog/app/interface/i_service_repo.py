from booking_service.service.catalog.app.interface.i_replica_repo import IReplicaRepo
from booking_service.service.catalog.domain.entity.service_entity import Service


class IServiceRepo(IReplicaRepo[Service]):
    pass
