"""
Companies — AuthContext Resolution Tests

@file companies/tests/test_context.py
"""

import uuid

import pytest

from companies.context import AuthContext, require_inventory_writer, resolve_auth_context
from companies.models import Membership
from core.exceptions import InvalidInputError, PermissionDeniedError
from tests.factories import CompanyFactory, MembershipFactory, SuperadminFactory, UserFactory


pytestmark = pytest.mark.django_db


class TestResolveAuthContext:

    def test_member_gets_membership_company_and_role(self):
        membership = MembershipFactory(role=Membership.Role.STAFF)
        ctx = resolve_auth_context(membership.user)
        assert ctx == AuthContext(
            company_id=membership.company_id, actor_id=membership.user.pk, role='STAFF',
        )

    def test_member_may_name_own_company(self):
        membership = MembershipFactory()
        ctx = resolve_auth_context(membership.user, str(membership.company_id))
        assert ctx.company_id == membership.company_id

    def test_member_cannot_reach_other_company(self):
        membership = MembershipFactory()
        other = CompanyFactory()
        with pytest.raises(PermissionDeniedError):
            resolve_auth_context(membership.user, str(other.pk))

    def test_inactive_membership_is_forbidden(self):
        membership = MembershipFactory(status=Membership.Status.INACTIVE)
        with pytest.raises(PermissionDeniedError):
            resolve_auth_context(membership.user)

    def test_user_without_membership_is_forbidden(self):
        with pytest.raises(PermissionDeniedError):
            resolve_auth_context(UserFactory())

    def test_superadmin_acts_in_named_company(self):
        company = CompanyFactory()
        user = SuperadminFactory()
        ctx = resolve_auth_context(user, str(company.pk))
        assert ctx.company_id == company.pk
        assert ctx.role == 'SUPERADMIN'

    def test_superadmin_must_name_a_company(self):
        with pytest.raises(InvalidInputError):
            resolve_auth_context(SuperadminFactory())

    def test_superadmin_unknown_company(self):
        with pytest.raises(PermissionDeniedError):
            resolve_auth_context(SuperadminFactory(), str(uuid.uuid4()))


class TestRequireInventoryWriter:

    @pytest.mark.parametrize('role', ['SUPERADMIN', 'ADMIN'])
    def test_writers(self, role):
        require_inventory_writer(AuthContext(uuid.uuid4(), uuid.uuid4(), role))

    def test_staff_is_read_only(self):
        with pytest.raises(PermissionDeniedError):
            require_inventory_writer(AuthContext(uuid.uuid4(), uuid.uuid4(), 'STAFF'))
