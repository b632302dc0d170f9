"""
Unit tests for UserContext.from_claims

Test Focus:
1. user_id and role are required; either the short or the URI claim name works
2. Numeric roles 1/0 map to Customer/Provider
3. A malformed tenant_id claim is treated as absent
"""

from uuid import UUID

import pytest

from booking_service.platform.exception.exceptions import (
    AuthenticationError,
    AuthorizationError,
)
from booking_service.service.shared_kernel.domain.value_object.user_context import (
    ClaimName,
    UserContext,
    UserRole,
)


USER_ID = 'aaaaaaaa-aaaa-aaaa-aaaa-aaaaaaaaaaaa'
TENANT_ID = '11111111-1111-1111-1111-111111111111'


@pytest.mark.unit
class TestUserContextFromClaims:
    def test_customer_without_tenant(self):
        user = UserContext.from_claims({'user_id': USER_ID, 'role': 'Customer'})

        assert user == UserContext(user_id=UUID(USER_ID), role=UserRole.CUSTOMER, tenant_id=None)
        assert user.is_customer and not user.is_provider

    def test_provider_with_tenant_from_uri_claims(self):
        user = UserContext.from_claims(
            {
                ClaimName.NAME_IDENTIFIER.value: USER_ID,
                ClaimName.ROLE_URI.value: 'provider',
                'tenant_id': TENANT_ID,
            }
        )

        assert user.role is UserRole.PROVIDER
        assert user.tenant_id == UUID(TENANT_ID)

    @pytest.mark.parametrize(
        'raw_role, role',
        [('1', UserRole.CUSTOMER), ('0', UserRole.PROVIDER), (0, UserRole.PROVIDER)],
    )
    def test_numeric_roles(self, raw_role, role):
        assert UserContext.from_claims({'user_id': USER_ID, 'role': raw_role}).role is role

    @pytest.mark.parametrize(
        'claims, missing',
        [
            ({'role': 'Customer'}, 'user_id'),
            ({'user_id': 'not-a-uuid', 'role': 'Customer'}, 'user_id'),
            ({'user_id': '', 'role': 'Customer'}, 'user_id'),
            ({'user_id': USER_ID}, 'role'),
            ({'user_id': USER_ID, 'role': 'Admin'}, 'role'),
        ],
    )
    def test_missing_or_invalid_identity_claims(self, claims, missing):
        with pytest.raises(AuthenticationError, match=f'missing {missing} claim'):
            UserContext.from_claims(claims)

    def test_malformed_tenant_claim_is_absent(self):
        user = UserContext.from_claims(
            {'user_id': USER_ID, 'role': 'Provider', 'tenant_id': 'tenant-a'}
        )

        assert user.tenant_id is None

    def test_ensure_customer_rejects_provider(self, provider, customer):
        customer.ensure_customer()

        with pytest.raises(AuthorizationError, match='not allowed for Providers'):
            provider.ensure_customer()
