"""
Tests — Stock opname API endpoints (views).

@file opnames/tests/test_views.py
"""

from decimal import Decimal

import pytest
from django.urls import reverse

from opnames.models import StockOpname
from stock.services import StockService


pytestmark = pytest.mark.django_db

LIST_URL = 'api-v1:inventory:opname-list'
ACTIVE_URL = 'api-v1:inventory:opname-active'


def _start(client):
    resp = client.post(reverse(LIST_URL), {'note': 'Cycle count'}, format='json')
    assert resp.status_code == 201
    return resp.data


def _count_url(opname_id, item_id):
    return reverse('api-v1:inventory:opname-count-item', kwargs={'pk': opname_id, 'item_id': item_id})


class TestOpnameLifecycle:

    def test_active_is_null_without_opname(self, staff_client):
        resp = staff_client.get(reverse(ACTIVE_URL))
        assert resp.status_code == 200
        assert resp.json() == {'success': True, 'data': None}

    def test_start_count_finalize(self, admin_client, variant, stock_in):
        stock_in(variant, 10)
        opname = _start(admin_client)
        assert opname['status'] == 'IN_PROGRESS'
        item = opname['items'][0]
        assert item['system_qty'] == '10.00'

        active = admin_client.get(reverse(ACTIVE_URL))
        assert active.data['id'] == opname['id']

        counted = admin_client.patch(_count_url(opname['id'], item['id']), {'counted_qty': '7'}, format='json')
        assert counted.status_code == 200
        assert counted.data['diff_qty'] == '-3.00'

        listed = admin_client.get(reverse(LIST_URL))
        assert listed.data['results'][0]['item_count'] == 1
        assert listed.data['results'][0]['diff_item_count'] == 1

        resp = admin_client.post(reverse('api-v1:inventory:opname-finalize', args=[opname['id']]))
        assert resp.status_code == 200
        assert resp.data['status'] == 'FINALIZED'
        assert StockService.get_balance(variant.company_id, variant.pk) == Decimal('7')
        assert admin_client.get(reverse(ACTIVE_URL)).data is None

    def test_second_start_conflicts(self, admin_client):
        _start(admin_client)
        resp = admin_client.post(reverse(LIST_URL), {}, format='json')
        assert resp.status_code == 409
        assert resp.data['code'] == 'CONFLICT'
        assert StockOpname.objects.count() == 1

    def test_opname_blocks_receiving_until_voided(self, admin_client, variant):
        opname = _start(admin_client)
        payload = {'status': 'POSTED', 'items': [{'variant_id': str(variant.pk), 'quantity': '3'}]}

        blocked = admin_client.post(reverse('api-v1:inventory:receiving-list'), payload, format='json')
        assert blocked.status_code == 409

        voided = admin_client.post(reverse('api-v1:inventory:opname-void', args=[opname['id']]))
        assert voided.status_code == 200
        assert voided.data['status'] == 'VOID'

        allowed = admin_client.post(reverse('api-v1:inventory:receiving-list'), payload, format='json')
        assert allowed.status_code == 201

    def test_opname_blocks_posting_a_draft_until_voided(self, admin_client, variant):
        payload = {'status': 'DRAFT', 'items': [{'variant_id': str(variant.pk), 'quantity': '4'}]}
        draft = admin_client.post(reverse('api-v1:inventory:receiving-list'), payload, format='json')
        assert draft.status_code == 201
        post_url = reverse('api-v1:inventory:receiving-post-receiving', args=[draft.data['id']])
        opname = _start(admin_client)

        blocked = admin_client.post(post_url)
        assert blocked.status_code == 409
        assert blocked.data['code'] == 'CONFLICT'
        assert StockService.get_balance(variant.company_id, variant.pk) == Decimal('0')

        admin_client.post(reverse('api-v1:inventory:opname-void', args=[opname['id']]))

        posted = admin_client.post(post_url)
        assert posted.status_code == 200
        assert posted.data['status'] == 'POSTED'
        assert StockService.get_balance(variant.company_id, variant.pk) == Decimal('4')

    def test_negative_count_invalid(self, admin_client, variant):
        opname = _start(admin_client)
        item_id = opname['items'][0]['id']
        resp = admin_client.patch(_count_url(opname['id'], item_id), {'counted_qty': '-1'}, format='json')
        assert resp.status_code == 400
        assert resp.data['code'] == 'INVALID_INPUT'

    def test_count_after_void_conflicts(self, admin_client, variant):
        opname = _start(admin_client)
        admin_client.post(reverse('api-v1:inventory:opname-void', args=[opname['id']]))
        resp = admin_client.patch(
            _count_url(opname['id'], opname['items'][0]['id']), {'counted_qty': '1'}, format='json',
        )
        assert resp.status_code == 409

    def test_staff_reads_but_cannot_start(self, staff_client):
        assert staff_client.get(reverse(LIST_URL)).status_code == 200
        resp = staff_client.post(reverse(LIST_URL), {}, format='json')
        assert resp.status_code == 403
        assert not StockOpname.objects.exists()
