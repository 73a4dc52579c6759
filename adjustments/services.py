"""
Adjustments — Service Layer

Manual stock correction: one call creates the adjustment, its items and one
ADJUST movement per item, after checking that no balance goes negative.

@file adjustments/services.py
"""

import logging
from decimal import Decimal
from typing import Any
from uuid import UUID

from catalog.services import ensure_variants_belong_to_company
from companies.context import AuthContext, require_inventory_writer
from core.constants import (
    AUDIT_ADJUSTMENT_POSTED,
    AUDIT_TARGET_ADJUSTMENT,
    ITEM_NOTE_MAX_LENGTH,
    MAX_DOCUMENT_ITEMS,
    NOTE_MAX_LENGTH,
    REASON_MAX_LENGTH,
)
from core.exceptions import InvalidInputError
from core.services import AuditService, unit_of_work
from core.validators import ensure_quantity_in_range, parse_uuid, to_nullable_text, to_quantity
from opnames.guards import ensure_no_active_opname
from stock.models import StockMovement
from stock.services import StockService

from .models import StockAdjustment, StockAdjustmentItem

logger = logging.getLogger('stockledger')


def merge_adjustment_lines(items: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """
    Sum qty_diff per variant (first non-empty note kept) and drop the
    variants whose merged diff is zero.
    """
    if not items:
        raise InvalidInputError(detail='At least one item is required.')
    if len(items) > MAX_DOCUMENT_ITEMS:
        raise InvalidInputError(detail=f'At most {MAX_DOCUMENT_ITEMS} items are allowed.')

    merged: dict[UUID, dict[str, Any]] = {}
    for raw in items:
        variant_id = parse_uuid(raw.get('variant_id'), 'variant_id')
        qty_diff = to_quantity(raw.get('qty_diff'), 'qty_diff')
        if qty_diff == 0:
            raise InvalidInputError(detail='qty_diff must not be zero.')
        note = to_nullable_text(raw.get('note'), 'note', ITEM_NOTE_MAX_LENGTH)

        line = merged.get(variant_id)
        if line is None:
            merged[variant_id] = {'variant_id': variant_id, 'qty_diff': qty_diff, 'note': note}
        else:
            line['qty_diff'] += qty_diff
            line['note'] = line['note'] or note

    lines = [line for line in merged.values() if line['qty_diff'] != 0]
    if not lines:
        raise InvalidInputError(detail='Adjustment items cancel each other out.')
    for line in lines:
        ensure_quantity_in_range(line['qty_diff'], 'qty_diff')
    return lines


class AdjustmentService:

    @staticmethod
    @unit_of_work('create_adjustment')
    def create_adjustment(
        ctx: AuthContext,
        *,
        reason: str,
        items: list[dict[str, Any]],
        note: str | None = None,
    ) -> StockAdjustment:
        require_inventory_writer(ctx)
        reason = to_nullable_text(reason, 'reason', REASON_MAX_LENGTH)
        if not reason:
            raise InvalidInputError(detail='reason is required.')
        note = to_nullable_text(note, 'note', NOTE_MAX_LENGTH)
        lines = merge_adjustment_lines(items)
        ensure_variants_belong_to_company(ctx.company_id, [line['variant_id'] for line in lines])

        ensure_no_active_opname(ctx.company_id)
        diffs = {line['variant_id']: line['qty_diff'] for line in lines}
        StockService.ensure_no_negative_balance(ctx.company_id, diffs)
        StockService.ensure_balance_within_limit(ctx.company_id, diffs)

        adjustment = StockAdjustment.objects.create(
            company_id=ctx.company_id,
            reason=reason,
            note=note,
            created_by_id=ctx.actor_id,
        )
        StockAdjustmentItem.objects.bulk_create([
            StockAdjustmentItem(
                company_id=ctx.company_id,
                adjustment=adjustment,
                variant_id=line['variant_id'],
                qty_diff=line['qty_diff'],
                note=line['note'],
            )
            for line in lines
        ])
        StockService.append_movements(ctx.company_id, [
            {
                'variant_id': line['variant_id'],
                'movement_type': StockMovement.MovementType.ADJUST,
                'quantity': line['qty_diff'],
                'reference_type': StockMovement.ReferenceType.ADJUSTMENT,
                'reference_id': adjustment.pk,
                'note': line['note'] or reason,
                'created_by_id': ctx.actor_id,
            }
            for line in lines
        ])

        total_qty_diff = sum((line['qty_diff'] for line in lines), Decimal('0.00'))
        AuditService.emit(
            ctx,
            action=AUDIT_ADJUSTMENT_POSTED,
            target_type=AUDIT_TARGET_ADJUSTMENT,
            target_id=adjustment.pk,
            metadata={'reason': reason, 'item_count': len(lines), 'total_qty_diff': total_qty_diff},
        )
        logger.info(
            'Adjustment %s posted: company=%s items=%d total_qty_diff=%s',
            adjustment.pk, ctx.company_id, len(lines), total_qty_diff,
        )
        return adjustment
