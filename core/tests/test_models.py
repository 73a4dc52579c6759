"""
Core — Model Tests

Tests for AuditLog and the base model mixins.

@file core/tests/test_models.py
"""

import pytest

from core.models import AuditLog
from tests.factories import AuditLogFactory, ProductFactory, UserFactory


@pytest.mark.django_db
class TestAuditLog:
    def test_create_audit_log(self):
        log = AuditLogFactory(metadata={'item_count': 2})
        assert log.pk is not None
        assert log.timestamp is not None
        assert AuditLog.objects.get(pk=log.pk).metadata == {'item_count': 2}

    def test_str_mentions_action_and_target(self):
        log = AuditLogFactory(action='opname.voided', target_type='stock_opname', target_id='abc')
        assert 'opname.voided' in str(log)
        assert 'stock_opname:abc' in str(log)


@pytest.mark.django_db
class TestSoftDeleteMixin:
    def test_soft_delete_and_restore(self):
        user = UserFactory()
        product = ProductFactory()
        product.soft_delete(user)
        product.refresh_from_db()
        assert product.is_deleted is True
        assert product.deleted_at is not None
        assert product.deleted_by == user

        product.restore()
        product.refresh_from_db()
        assert product.is_deleted is False
        assert product.deleted_by is None
