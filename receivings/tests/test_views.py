"""
Tests — Receivings API endpoints (views).

@file receivings/tests/test_views.py
"""

from decimal import Decimal

import pytest
from django.urls import reverse

from receivings.models import Receiving
from stock.services import StockService
from tests.factories import ProductVariantFactory, ReceivingFactory, ReceivingItemFactory


pytestmark = pytest.mark.django_db

LIST_URL = 'api-v1:inventory:receiving-list'


def _payload(variant, quantity='5', status='DRAFT'):
    return {'status': status, 'items': [{'variant_id': str(variant.pk), 'quantity': quantity}]}


class TestReceivingListCreate:

    def test_list_requires_auth(self, api_client):
        assert api_client.get(reverse(LIST_URL)).status_code == 401

    def test_list_annotates_totals(self, staff_client, company):
        receiving = ReceivingFactory(company=company)
        ReceivingItemFactory(receiving=receiving, quantity=Decimal('2'))
        ReceivingItemFactory(receiving=receiving, quantity=Decimal('3.5'))
        ReceivingFactory()  # another company

        resp = staff_client.get(reverse(LIST_URL))

        assert resp.status_code == 200
        assert resp.data['count'] == 1
        row = resp.data['results'][0]
        assert row['item_count'] == 2
        assert row['total_qty'] == '5.50'

    def test_filter_by_status(self, staff_client, company):
        ReceivingFactory(company=company, status=Receiving.Status.DRAFT)
        ReceivingFactory(company=company, status=Receiving.Status.VOID)
        resp = staff_client.get(reverse(LIST_URL), {'status': 'VOID'})
        assert resp.data['count'] == 1

    def test_create_draft(self, admin_client, variant):
        resp = admin_client.post(reverse(LIST_URL), _payload(variant), format='json')
        assert resp.status_code == 201
        body = resp.json()
        assert body['success'] is True
        assert body['data']['status'] == 'DRAFT'
        assert body['data']['items'][0]['quantity'] == '5.00'
        assert StockService.get_balance(variant.company_id, variant.pk) == Decimal('0')

    def test_create_posted_moves_stock(self, admin_client, variant):
        resp = admin_client.post(reverse(LIST_URL), _payload(variant, '4', 'POSTED'), format='json')
        assert resp.status_code == 201
        assert resp.data['posted_at'] is not None
        assert StockService.get_balance(variant.company_id, variant.pk) == Decimal('4')

    def test_create_as_staff_forbidden(self, staff_client, variant):
        resp = staff_client.post(reverse(LIST_URL), _payload(variant), format='json')
        assert resp.status_code == 403
        assert resp.data['code'] == 'FORBIDDEN'
        assert not Receiving.objects.exists()

    def test_empty_items_invalid(self, admin_client):
        resp = admin_client.post(reverse(LIST_URL), {'items': []}, format='json')
        assert resp.status_code == 400
        assert resp.data['code'] == 'INVALID_INPUT'

    def test_non_positive_quantity_invalid(self, admin_client, variant):
        resp = admin_client.post(reverse(LIST_URL), _payload(variant, '0'), format='json')
        assert resp.status_code == 400

    def test_foreign_variant_invalid(self, admin_client, other_company):
        foreign = ProductVariantFactory(product__company=other_company)
        resp = admin_client.post(reverse(LIST_URL), _payload(foreign), format='json')
        assert resp.status_code == 400
        assert resp.data['code'] == 'INVALID_INPUT'


    def test_merged_lines_over_limit_invalid(self, admin_client, variant):
        line = {'variant_id': str(variant.pk), 'quantity': '600000000000'}
        payload = {'status': 'POSTED', 'items': [line, line]}
        resp = admin_client.post(reverse(LIST_URL), payload, format='json')
        assert resp.status_code == 400
        assert resp.data['code'] == 'INVALID_INPUT'
        assert not Receiving.objects.exists()


class TestReceivingActions:

    def test_post_draft(self, admin_client, variant):
        created = admin_client.post(reverse(LIST_URL), _payload(variant, '6'), format='json')
        url = reverse('api-v1:inventory:receiving-post-receiving', args=[created.data['id']])

        resp = admin_client.post(url)

        assert resp.status_code == 200
        assert resp.data['status'] == 'POSTED'
        assert StockService.get_balance(variant.company_id, variant.pk) == Decimal('6')

    def test_post_twice_conflicts(self, admin_client, variant):
        created = admin_client.post(reverse(LIST_URL), _payload(variant), format='json')
        url = reverse('api-v1:inventory:receiving-post-receiving', args=[created.data['id']])
        admin_client.post(url)
        resp = admin_client.post(url)
        assert resp.status_code == 409
        assert resp.data['code'] == 'CONFLICT'

    def test_void_draft(self, admin_client, variant):
        created = admin_client.post(reverse(LIST_URL), _payload(variant), format='json')
        resp = admin_client.post(reverse('api-v1:inventory:receiving-void', args=[created.data['id']]))
        assert resp.status_code == 200
        assert resp.data['status'] == 'VOID'

    def test_retrieve_other_company_not_found(self, admin_client):
        receiving = ReceivingFactory()
        resp = admin_client.get(reverse('api-v1:inventory:receiving-detail', args=[receiving.pk]))
        assert resp.status_code == 404
        assert resp.data['code'] == 'NOT_FOUND'
