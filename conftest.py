"""
StockLedger — Root conftest for pytest

Shared fixtures available to all test modules.

@file conftest.py
"""

from decimal import Decimal

import pytest
from rest_framework.test import APIClient

from companies.models import Membership
from tests.factories import (
    CompanyFactory,
    MembershipFactory,
    ProductVariantFactory,
    StockMovementFactory,
    SuperadminFactory,
    make_context,
)


@pytest.fixture
def api_client():
    """Unauthenticated DRF test client."""
    return APIClient()


@pytest.fixture
def company(db):
    return CompanyFactory()


@pytest.fixture
def other_company(db):
    return CompanyFactory()


@pytest.fixture
def admin_membership(company):
    return MembershipFactory(company=company, role=Membership.Role.ADMIN)


@pytest.fixture
def staff_membership(company):
    return MembershipFactory(company=company, role=Membership.Role.STAFF)


@pytest.fixture
def admin_context(admin_membership):
    """AuthContext of a company ADMIN."""
    return make_context(admin_membership.company, admin_membership.user, role=Membership.Role.ADMIN)


@pytest.fixture
def staff_context(staff_membership):
    return make_context(staff_membership.company, staff_membership.user, role=Membership.Role.STAFF)


@pytest.fixture
def variant(company):
    return ProductVariantFactory(product__company=company)


@pytest.fixture
def stock_in(db):
    """Seed a balance directly in the ledger: stock_in(variant, '10')."""
    def _seed(variant, quantity):
        return StockMovementFactory(variant=variant, quantity=Decimal(str(quantity)))
    return _seed


@pytest.fixture
def admin_client(api_client, admin_membership):
    """API client authenticated as a company ADMIN."""
    api_client.force_authenticate(user=admin_membership.user)
    return api_client


@pytest.fixture
def staff_client(api_client, staff_membership):
    api_client.force_authenticate(user=staff_membership.user)
    return api_client


@pytest.fixture
def superadmin_client(api_client, db):
    api_client.force_authenticate(user=SuperadminFactory())
    return api_client
