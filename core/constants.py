"""
Core — Constants

Shared limits and names used across the inventory apps.

@file core/constants.py
"""

from decimal import Decimal

# ---------------------------------------------------------------------------
# Pagination
# ---------------------------------------------------------------------------

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100

# ---------------------------------------------------------------------------
# Quantities — numeric(14, 2)
# ---------------------------------------------------------------------------

QUANTITY_MAX_DIGITS = 14
QUANTITY_DECIMAL_PLACES = 2
QUANTITY_STEP = Decimal('0.01')
QUANTITY_MAX = Decimal('999999999999.99')

# ---------------------------------------------------------------------------
# Document payload limits
# ---------------------------------------------------------------------------

MAX_DOCUMENT_ITEMS = 100
NOTE_MAX_LENGTH = 500
ITEM_NOTE_MAX_LENGTH = 300
REASON_MAX_LENGTH = 160

OPNAME_ADJUSTMENT_NOTE = 'Stock opname adjustment'

# ---------------------------------------------------------------------------
# Audit actions (domain.verb)
# ---------------------------------------------------------------------------

AUDIT_RECEIVING_CREATED = 'receiving.created'
AUDIT_RECEIVING_POSTED = 'receiving.posted'
AUDIT_RECEIVING_VOIDED = 'receiving.voided'
AUDIT_ADJUSTMENT_POSTED = 'adjustment.posted'
AUDIT_OPNAME_STARTED = 'opname.started'
AUDIT_OPNAME_ITEM_COUNTED = 'opname.item_counted_qty_updated'
AUDIT_OPNAME_FINALIZED = 'opname.finalized'
AUDIT_OPNAME_VOIDED = 'opname.voided'

AUDIT_TARGET_RECEIVING = 'receiving'
AUDIT_TARGET_ADJUSTMENT = 'stock_adjustment'
AUDIT_TARGET_OPNAME = 'stock_opname'
