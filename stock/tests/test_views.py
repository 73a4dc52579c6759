"""
Tests — Stock table and movement history endpoints.

@file stock/tests/test_views.py
"""

import uuid
from decimal import Decimal

import pytest
from django.urls import reverse

from tests.factories import ProductVariantFactory, StockMovementFactory


pytestmark = pytest.mark.django_db

STOCK_URL = 'api-v1:inventory:stock-list'
MOVEMENTS_URL = 'api-v1:inventory:movement-list'


class TestStockTable:

    def test_requires_auth(self, api_client):
        resp = api_client.get(reverse(STOCK_URL))
        assert resp.status_code == 401
        assert resp.data['code'] == 'UNAUTHENTICATED'

    def test_lists_balances_in_envelope(self, staff_client, variant, stock_in):
        stock_in(variant, 10)
        StockMovementFactory(variant=variant, movement_type='OUT', quantity=Decimal('3'), reference_type='SALE')

        resp = staff_client.get(reverse(STOCK_URL))

        assert resp.status_code == 200
        body = resp.json()
        assert body['success'] is True
        assert body['meta']['count'] == 1
        assert body['meta']['page'] == 1
        row = body['data'][0]
        assert row['variant_id'] == str(variant.pk)
        assert row['balance'] == '7.00'

    def test_variant_without_movements_shows_zero(self, staff_client, variant):
        resp = staff_client.get(reverse(STOCK_URL))
        assert resp.data['results'][0]['balance'] == '0.00'

    def test_other_company_is_invisible(self, staff_client, variant, other_company):
        foreign = ProductVariantFactory(product__company=other_company)
        StockMovementFactory(variant=foreign)
        resp = staff_client.get(reverse(STOCK_URL))
        assert [row['variant_id'] for row in resp.data['results']] == [str(variant.pk)]

    def test_search(self, staff_client, company):
        ProductVariantFactory(product__company=company, product__name='Arabica beans', sku='ARB-1')
        ProductVariantFactory(product__company=company, product__name='Green tea', sku='TEA-1')
        resp = staff_client.get(reverse(STOCK_URL), {'search': 'arabica'})
        assert resp.data['count'] == 1
        assert resp.data['results'][0]['sku'] == 'ARB-1'

    def test_superadmin_must_select_company(self, superadmin_client):
        resp = superadmin_client.get(reverse(STOCK_URL))
        assert resp.status_code == 400
        assert resp.data['code'] == 'INVALID_INPUT'

    def test_superadmin_with_company_header(self, superadmin_client, variant, stock_in):
        stock_in(variant, 5)
        resp = superadmin_client.get(reverse(STOCK_URL), HTTP_X_COMPANY_ID=str(variant.company_id))
        assert resp.status_code == 200
        assert resp.data['results'][0]['balance'] == '5.00'

    def test_member_cannot_select_another_company(self, staff_client, other_company):
        resp = staff_client.get(reverse(STOCK_URL), HTTP_X_COMPANY_ID=str(other_company.pk))
        assert resp.status_code == 403
        assert resp.data['code'] == 'FORBIDDEN'


class TestMovementHistory:

    def test_filters_by_reference(self, staff_client, variant):
        wanted = StockMovementFactory(variant=variant)
        StockMovementFactory(variant=variant)
        resp = staff_client.get(reverse(MOVEMENTS_URL), {'reference_id': str(wanted.reference_id)})
        assert resp.status_code == 200
        assert [row['id'] for row in resp.data['results']] == [str(wanted.pk)]

    def test_filters_by_variant(self, staff_client, company, variant):
        StockMovementFactory(variant=variant)
        StockMovementFactory(variant=ProductVariantFactory(product__company=company))
        resp = staff_client.get(reverse(MOVEMENTS_URL), {'variant': str(variant.pk)})
        assert resp.data['count'] == 1
        assert resp.data['results'][0]['variant'] == str(variant.pk)

    def test_malformed_filter_is_invalid_input(self, staff_client):
        resp = staff_client.get(reverse(MOVEMENTS_URL), {'variant': 'not-a-uuid'})
        assert resp.status_code == 400
        assert resp.data['code'] == 'INVALID_INPUT'

    def test_unknown_reference_returns_empty_page(self, staff_client, variant):
        StockMovementFactory(variant=variant)
        resp = staff_client.get(reverse(MOVEMENTS_URL), {'reference_id': str(uuid.uuid4())})
        assert resp.data['count'] == 0
