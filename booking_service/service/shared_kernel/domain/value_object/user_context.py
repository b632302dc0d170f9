from collections.abc import Mapping
from enum import StrEnum
from typing import Any
from uuid import UUID

import attrs

from booking_service.platform.exception.exceptions import (
    AuthenticationError,
    AuthorizationError,
)


class UserRole(StrEnum):
    CUSTOMER = 'Customer'
    PROVIDER = 'Provider'


class ClaimName(StrEnum):
    USER_ID = 'user_id'
    TENANT_ID = 'tenant_id'
    ROLE = 'role'
    # Fallbacks emitted by identity providers that use the WS-Federation claim URIs
    NAME_IDENTIFIER = 'http://schemas.xmlsoap.org/ws/2005/05/identity/claims/nameidentifier'
    ROLE_URI = 'http://schemas.microsoft.com/ws/2008/06/identity/claims/role'


_NUMERIC_ROLES = {'1': UserRole.CUSTOMER, '0': UserRole.PROVIDER}


def _first_claim(claims: Mapping[str, Any], *names: str) -> Any:
    for name in names:
        value = claims.get(name)
        if value is not None and value != '':
            return value
    return None


def _parse_uuid(value: Any) -> UUID | None:
    if isinstance(value, UUID):
        return value
    if not value:
        return None
    try:
        return UUID(str(value))
    except ValueError:
        return None


def _parse_role(value: Any) -> UserRole | None:
    if value is None:
        return None
    raw = str(value).strip()
    if raw in _NUMERIC_ROLES:
        return _NUMERIC_ROLES[raw]
    for role in UserRole:
        if raw.lower() == role.value.lower():
            return role
    return None


@attrs.frozen
class UserContext:
    """Authenticated identity of the caller, built once per request."""

    user_id: UUID
    role: UserRole
    tenant_id: UUID | None = None

    @classmethod
    def from_claims(cls, claims: Mapping[str, Any]) -> 'UserContext':
        user_id = _parse_uuid(
            _first_claim(claims, ClaimName.USER_ID, ClaimName.NAME_IDENTIFIER)
        )
        if user_id is None:
            raise AuthenticationError('Invalid or missing user_id claim in token')

        role = _parse_role(_first_claim(claims, ClaimName.ROLE, ClaimName.ROLE_URI))
        if role is None:
            raise AuthenticationError('Invalid or missing role claim in token')

        # A malformed tenant claim is treated as absent
        return cls(
            user_id=user_id,
            role=role,
            tenant_id=_parse_uuid(claims.get(ClaimName.TENANT_ID)),
        )

    @property
    def is_customer(self) -> bool:
        return self.role is UserRole.CUSTOMER

    @property
    def is_provider(self) -> bool:
        return self.role is UserRole.PROVIDER

    def ensure_customer(self) -> None:
        if not self.is_customer:
            raise AuthorizationError(
                'Access denied. Customer operations not allowed for Providers.',
                resource='Booking',
                action='customer-only',
            )
