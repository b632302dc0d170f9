from booking_service.service.catalog.app.interface.i_replica_repo import IReplicaRepo
from booking_service.service.catalog.domain.entity.category_entity import Category


class ICategoryRepo(IReplicaRepo[Category]):
    pass
