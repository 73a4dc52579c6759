"""
Opnames — Concurrency Guard

While a stock opname is IN_PROGRESS for a company, no other workflow may
post to that company's ledger. Every ledger-posting operation and opname
start/finalize first serializes on a transaction-scoped PostgreSQL advisory
lock keyed by the company, then checks for an active opname. The lock is
released when the surrounding transaction ends.

@file opnames/guards.py
"""

import hashlib
import logging
from uuid import UUID

from django.conf import settings
from django.db import connection

from core.exceptions import InventoryLockedError

from .models import StockOpname

logger = logging.getLogger('stockledger')


def _advisory_lock_key(company_id: UUID) -> int:
    """Stable signed bigint key for pg_advisory_xact_lock (same company = same key)."""
    namespace = getattr(settings, 'INVENTORY_LOCK_NAMESPACE', 'inventory')
    raw = f'{namespace}:{company_id}'.encode()
    digest = hashlib.sha256(raw).digest()[:8]
    return int.from_bytes(digest, 'big', signed=True)


def lock_company_inventory(company_id: UUID) -> None:
    """
    Serialize inventory writers of ``company_id`` until the current
    transaction ends. Must be called inside transaction.atomic(). On
    backends other than PostgreSQL this is a no-op and the database's own
    write serialization applies.
    """
    if connection.vendor != 'postgresql':
        return
    with connection.cursor() as cursor:
        cursor.execute('SELECT pg_advisory_xact_lock(%s)', [_advisory_lock_key(company_id)])


def find_active_opname_id(company_id: UUID) -> UUID | None:
    return (
        StockOpname.objects
        .filter(company_id=company_id, status=StockOpname.Status.IN_PROGRESS)
        .values_list('pk', flat=True)
        .first()
    )


def ensure_no_active_opname(company_id: UUID) -> None:
    """Take the company lock, then reject if an opname is in progress."""
    lock_company_inventory(company_id)
    active_id = find_active_opname_id(company_id)
    if active_id is not None:
        logger.info('Inventory posting blocked for company %s by opname %s', company_id, active_id)
        raise InventoryLockedError()
