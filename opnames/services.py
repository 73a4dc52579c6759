"""
Opnames — Service Layer

Stock opname workflow: start (snapshot balances), record counts, finalize
(post differences as ADJUST movements) or void. While an opname is
IN_PROGRESS every other ledger posting of the company is blocked by
opnames.guards.

@file opnames/services.py
"""

import logging
from decimal import Decimal
from uuid import UUID

from django.db import IntegrityError, transaction
from django.utils import timezone

from catalog.services import active_variants
from companies.context import AuthContext, require_inventory_writer
from core.constants import (
    AUDIT_OPNAME_FINALIZED,
    AUDIT_OPNAME_ITEM_COUNTED,
    AUDIT_OPNAME_STARTED,
    AUDIT_OPNAME_VOIDED,
    AUDIT_TARGET_OPNAME,
    NOTE_MAX_LENGTH,
    OPNAME_ADJUSTMENT_NOTE,
)
from core.exceptions import (
    ActiveOpnameExistsError,
    InvalidInputError,
    InvalidStateTransition,
    ResourceNotFoundError,
)
from core.services import AuditService, unit_of_work
from core.validators import parse_uuid, to_nullable_text, to_quantity
from stock.models import StockMovement
from stock.services import StockService, merge_variant_diffs

from .guards import find_active_opname_id, lock_company_inventory
from .models import StockOpname, StockOpnameItem

logger = logging.getLogger('stockledger')


def _lock_opname(ctx: AuthContext, opname_id: UUID, action: str) -> StockOpname:
    """Row-lock the opname header and require it to be IN_PROGRESS."""
    opname = (
        StockOpname.objects
        .select_for_update()
        .filter(pk=opname_id, company_id=ctx.company_id)
        .first()
    )
    if opname is None:
        raise ResourceNotFoundError(detail='Stock opname not found.')
    if not opname.is_in_progress:
        raise InvalidStateTransition(detail=f'Cannot {action} a stock opname in status {opname.status}.')
    return opname


class OpnameService:
    """Physical stock count reconciliation."""

    @staticmethod
    @unit_of_work('start_opname')
    def start_opname(ctx: AuthContext, *, note: str | None = None) -> StockOpname:
        """
        Open a new count for the company and snapshot the current balance of
        every active variant as both system_qty and counted_qty.
        """
        require_inventory_writer(ctx)
        note = to_nullable_text(note, 'note', NOTE_MAX_LENGTH)

        lock_company_inventory(ctx.company_id)
        if find_active_opname_id(ctx.company_id) is not None:
            raise ActiveOpnameExistsError()

        try:
            with transaction.atomic():
                opname = StockOpname.objects.create(
                    company_id=ctx.company_id,
                    status=StockOpname.Status.IN_PROGRESS,
                    note=note,
                    started_by_id=ctx.actor_id,
                )
        except IntegrityError:
            logger.info('Concurrent opname start rejected for company %s', ctx.company_id)
            raise ActiveOpnameExistsError()

        variant_ids = list(active_variants(ctx.company_id).values_list('pk', flat=True))
        balances = StockService.get_balances(ctx.company_id, variant_ids)
        StockOpnameItem.objects.bulk_create([
            StockOpnameItem(
                company_id=ctx.company_id,
                opname=opname,
                variant_id=variant_id,
                system_qty=balances[variant_id],
                counted_qty=balances[variant_id],
                diff_qty=Decimal('0.00'),
            )
            for variant_id in variant_ids
        ])

        AuditService.emit(
            ctx,
            action=AUDIT_OPNAME_STARTED,
            target_type=AUDIT_TARGET_OPNAME,
            target_id=opname.pk,
            metadata={'item_count': len(variant_ids)},
        )
        logger.info(
            'Opname %s started: company=%s items=%d', opname.pk, ctx.company_id, len(variant_ids),
        )
        return opname

    @staticmethod
    @unit_of_work('update_counted_qty')
    def update_counted_qty(ctx: AuthContext, opname_id, item_id, counted_qty) -> StockOpnameItem:
        """Record the physical count of one line. Last write wins."""
        require_inventory_writer(ctx)
        opname_id = parse_uuid(opname_id, 'opname_id')
        item_id = parse_uuid(item_id, 'item_id')
        counted_qty = to_quantity(counted_qty, 'counted_qty')
        if counted_qty < 0:
            raise InvalidInputError(detail='counted_qty must not be negative.')

        _lock_opname(ctx, opname_id, 'update counts of')
        item = (
            StockOpnameItem.objects
            .select_for_update()
            .filter(pk=item_id, opname_id=opname_id, company_id=ctx.company_id)
            .first()
        )
        if item is None:
            raise ResourceNotFoundError(detail='Stock opname item not found.')

        item.counted_qty = counted_qty
        item.diff_qty = counted_qty - item.system_qty
        item.save(update_fields=['counted_qty', 'diff_qty', 'updated_at'])

        AuditService.emit(
            ctx,
            action=AUDIT_OPNAME_ITEM_COUNTED,
            target_type=AUDIT_TARGET_OPNAME,
            target_id=opname_id,
            metadata={'stock_opname_item_id': item.pk, 'counted_qty': counted_qty},
        )
        logger.debug('Opname %s item %s counted_qty=%s', opname_id, item.pk, counted_qty)
        return item

    @staticmethod
    @unit_of_work('finalize_opname')
    def finalize_opname(ctx: AuthContext, opname_id) -> StockOpname:
        """
        Post every non-zero count difference as an ADJUST movement and close
        the opname. If any resulting balance would be negative nothing is
        written and the opname stays IN_PROGRESS.
        """
        require_inventory_writer(ctx)
        opname_id = parse_uuid(opname_id, 'opname_id')

        lock_company_inventory(ctx.company_id)
        _lock_opname(ctx, opname_id, 'finalize')

        items = list(StockOpnameItem.objects.filter(opname_id=opname_id, company_id=ctx.company_id))
        now = timezone.now()
        for item in items:
            item.diff_qty = item.counted_qty - item.system_qty
            item.updated_at = now
        diffs = merge_variant_diffs((item.variant_id, item.diff_qty) for item in items)

        StockService.ensure_no_negative_balance(ctx.company_id, diffs)
        StockService.ensure_balance_within_limit(ctx.company_id, diffs)
        StockService.append_movements(ctx.company_id, [
            {
                'variant_id': variant_id,
                'movement_type': StockMovement.MovementType.ADJUST,
                'quantity': diff,
                'reference_type': StockMovement.ReferenceType.OPNAME,
                'reference_id': opname_id,
                'note': OPNAME_ADJUSTMENT_NOTE,
                'created_by_id': ctx.actor_id,
            }
            for variant_id, diff in diffs.items()
        ])
        if items:
            StockOpnameItem.objects.bulk_update(items, ['diff_qty', 'updated_at'])

        updated = (
            StockOpname.objects
            .filter(pk=opname_id, company_id=ctx.company_id, status=StockOpname.Status.IN_PROGRESS)
            .update(
                status=StockOpname.Status.FINALIZED,
                finalized_at=now,
                finalized_by_id=ctx.actor_id,
                updated_at=now,
            )
        )
        if not updated:
            raise InvalidStateTransition(detail='Stock opname is no longer in progress.')

        total_qty_diff = sum(diffs.values(), Decimal('0.00'))
        AuditService.emit(
            ctx,
            action=AUDIT_OPNAME_FINALIZED,
            target_type=AUDIT_TARGET_OPNAME,
            target_id=opname_id,
            metadata={'diff_item_count': len(diffs), 'total_qty_diff': total_qty_diff},
        )
        logger.info(
            'Opname %s finalized: company=%s adjusted_variants=%d total_qty_diff=%s',
            opname_id, ctx.company_id, len(diffs), total_qty_diff,
        )
        return StockOpname.objects.get(pk=opname_id)

    @staticmethod
    @unit_of_work('void_opname')
    def void_opname(ctx: AuthContext, opname_id) -> StockOpname:
        """IN_PROGRESS → VOID. Counts are discarded; the ledger is untouched."""
        require_inventory_writer(ctx)
        opname_id = parse_uuid(opname_id, 'opname_id')

        now = timezone.now()
        updated = (
            StockOpname.objects
            .filter(pk=opname_id, company_id=ctx.company_id, status=StockOpname.Status.IN_PROGRESS)
            .update(
                status=StockOpname.Status.VOID,
                voided_at=now,
                voided_by_id=ctx.actor_id,
                updated_at=now,
            )
        )
        if not updated:
            current = (
                StockOpname.objects
                .filter(pk=opname_id, company_id=ctx.company_id)
                .values_list('status', flat=True)
                .first()
            )
            if current is None:
                raise ResourceNotFoundError(detail='Stock opname not found.')
            raise InvalidStateTransition(detail=f'Cannot void a stock opname in status {current}.')

        AuditService.emit(
            ctx,
            action=AUDIT_OPNAME_VOIDED,
            target_type=AUDIT_TARGET_OPNAME,
            target_id=opname_id,
        )
        logger.info('Opname %s voided: company=%s', opname_id, ctx.company_id)
        return StockOpname.objects.get(pk=opname_id)

    @staticmethod
    def get_active_opname(company_id: UUID) -> StockOpname | None:
        """The IN_PROGRESS opname of the company with its items and variants, or None."""
        return (
            StockOpname.objects
            .filter(company_id=company_id, status=StockOpname.Status.IN_PROGRESS)
            .prefetch_related('items__variant__product')
            .first()
        )
