from enum import StrEnum


class CustomBaseError(Exception):
    """Base class for all custom exceptions - controls logging behavior in @Logger.io"""

    error_code: str = 'INTERNAL_ERROR'

    def __init__(self, message: str, status_code: int = 500) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class ValidationError(CustomBaseError):
    error_code = 'VALIDATION_ERROR'

    def __init__(self, message: str) -> None:
        super().__init__(message, 400)


class AuthenticationError(CustomBaseError):
    error_code = 'AUTHENTICATION_ERROR'

    def __init__(self, message: str) -> None:
        super().__init__(message, 401)


class AuthorizationError(CustomBaseError):
    error_code = 'AUTHORIZATION_ERROR'

    def __init__(
        self, message: str, *, resource: str | None = None, action: str | None = None
    ) -> None:
        self.resource = resource
        self.action = action
        super().__init__(message, 403)


class NotFoundError(CustomBaseError):
    error_code = 'NOT_FOUND'

    def __init__(self, resource: str, resource_id: object) -> None:
        self.resource = resource
        self.resource_id = resource_id
        super().__init__(f"{resource} with id '{resource_id}' was not found", 404)


class ConflictKind(StrEnum):
    SERVICE_INACTIVE = 'SERVICE_INACTIVE'
    SLOT_UNAVAILABLE = 'SLOT_UNAVAILABLE'
    STATUS = 'STATUS'


class ConflictError(CustomBaseError):
    error_code = 'CONFLICT'

    def __init__(self, conflict_type: ConflictKind, message: str) -> None:
        self.conflict_type = conflict_type
        super().__init__(message, 409)


class ServiceUnavailableError(CustomBaseError):
    error_code = 'SERVICE_UNAVAILABLE'

    def __init__(self, message: str) -> None:
        super().__init__(message, 503)


class EventPublishError(ServiceUnavailableError):
    """Raised when a booking event could not be delivered to the broker"""


class DatabaseError(CustomBaseError):
    error_code = 'DATABASE_ERROR'

    def __init__(self, *, operation: str, entity: str, message: str) -> None:
        self.operation = operation
        self.entity = entity
        super().__init__(message, 500)
