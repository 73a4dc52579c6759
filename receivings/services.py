"""
Receivings — Service Layer

Goods-in workflow: create (as DRAFT or directly POSTED), post, void.
Posting appends one IN movement per line and is blocked while a stock
opname is in progress for the company.

@file receivings/services.py
"""

import logging
from decimal import Decimal
from typing import Any
from uuid import UUID

from django.utils import timezone

from catalog.services import ensure_variants_belong_to_company
from companies.context import AuthContext, require_inventory_writer
from core.constants import (
    AUDIT_RECEIVING_CREATED,
    AUDIT_RECEIVING_POSTED,
    AUDIT_RECEIVING_VOIDED,
    AUDIT_TARGET_RECEIVING,
    ITEM_NOTE_MAX_LENGTH,
    MAX_DOCUMENT_ITEMS,
    NOTE_MAX_LENGTH,
)
from core.exceptions import InvalidInputError, InvalidStateTransition, ResourceNotFoundError
from core.services import AuditService, unit_of_work
from core.validators import ensure_quantity_in_range, parse_uuid, to_nullable_text, to_quantity
from opnames.guards import ensure_no_active_opname
from stock.models import StockMovement
from stock.services import StockService

from .models import Receiving, ReceivingItem

logger = logging.getLogger('stockledger')


def merge_receiving_lines(items: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """
    Validate raw lines and merge duplicates per variant: quantities are
    summed, the first non-empty note is kept. Input order is preserved.
    """
    if not items:
        raise InvalidInputError(detail='At least one item is required.')
    if len(items) > MAX_DOCUMENT_ITEMS:
        raise InvalidInputError(detail=f'At most {MAX_DOCUMENT_ITEMS} items are allowed.')

    merged: dict[UUID, dict[str, Any]] = {}
    for raw in items:
        variant_id = parse_uuid(raw.get('variant_id'), 'variant_id')
        quantity = to_quantity(raw.get('quantity'), 'quantity')
        if quantity <= 0:
            raise InvalidInputError(detail='quantity must be greater than zero.')
        note = to_nullable_text(raw.get('note'), 'note', ITEM_NOTE_MAX_LENGTH)

        line = merged.get(variant_id)
        if line is None:
            merged[variant_id] = {'variant_id': variant_id, 'quantity': quantity, 'note': note}
        else:
            line['quantity'] += quantity
            line['note'] = line['note'] or note

    for line in merged.values():
        ensure_quantity_in_range(line['quantity'], 'quantity')
    return list(merged.values())


def _total_quantity(lines) -> Decimal:
    return sum((line['quantity'] for line in lines), Decimal('0.00'))


def _in_movements(receiving_id: UUID, lines, actor_id: UUID) -> list[dict[str, Any]]:
    return [
        {
            'variant_id': line['variant_id'],
            'movement_type': StockMovement.MovementType.IN,
            'quantity': line['quantity'],
            'reference_type': StockMovement.ReferenceType.RECEIVING,
            'reference_id': receiving_id,
            'note': line['note'],
            'created_by_id': actor_id,
        }
        for line in lines
    ]


def _raise_for_missed_transition(ctx: AuthContext, receiving_id: UUID, action: str):
    current = (
        Receiving.objects
        .filter(pk=receiving_id, company_id=ctx.company_id)
        .values_list('status', flat=True)
        .first()
    )
    if current is None:
        raise ResourceNotFoundError(detail='Receiving not found.')
    raise InvalidStateTransition(detail=f'Cannot {action} a receiving in status {current}.')


class ReceivingService:
    """Goods-in documents and their IN postings."""

    @staticmethod
    @unit_of_work('create_receiving')
    def create_receiving(
        ctx: AuthContext,
        *,
        status: str = Receiving.Status.DRAFT,
        items: list[dict[str, Any]],
        note: str | None = None,
    ) -> Receiving:
        """Create a receiving as DRAFT, or POSTED with its IN movements in the same unit of work."""
        require_inventory_writer(ctx)
        if status not in (Receiving.Status.DRAFT, Receiving.Status.POSTED):
            raise InvalidInputError(detail='status must be DRAFT or POSTED.')
        lines = merge_receiving_lines(items)
        note = to_nullable_text(note, 'note', NOTE_MAX_LENGTH)
        ensure_variants_belong_to_company(ctx.company_id, [line['variant_id'] for line in lines])

        posting = status == Receiving.Status.POSTED
        if posting:
            ensure_no_active_opname(ctx.company_id)
            StockService.ensure_balance_within_limit(
                ctx.company_id, {line['variant_id']: line['quantity'] for line in lines},
            )

        now = timezone.now()
        receiving = Receiving.objects.create(
            company_id=ctx.company_id,
            status=status,
            note=note,
            posted_at=now if posting else None,
            created_by_id=ctx.actor_id,
        )
        ReceivingItem.objects.bulk_create([
            ReceivingItem(
                company_id=ctx.company_id,
                receiving=receiving,
                variant_id=line['variant_id'],
                quantity=line['quantity'],
                note=line['note'],
            )
            for line in lines
        ])
        if posting:
            StockService.append_movements(ctx.company_id, _in_movements(receiving.pk, lines, ctx.actor_id))

        total_qty = _total_quantity(lines)
        AuditService.emit(
            ctx,
            action=AUDIT_RECEIVING_CREATED,
            target_type=AUDIT_TARGET_RECEIVING,
            target_id=receiving.pk,
            metadata={'status': status, 'item_count': len(lines), 'total_qty': total_qty},
        )
        if posting:
            AuditService.emit(
                ctx,
                action=AUDIT_RECEIVING_POSTED,
                target_type=AUDIT_TARGET_RECEIVING,
                target_id=receiving.pk,
                metadata={'item_count': len(lines), 'total_qty': total_qty},
            )
        logger.info(
            'Receiving %s created as %s: company=%s items=%d total_qty=%s',
            receiving.pk, status, ctx.company_id, len(lines), total_qty,
        )
        return receiving

    @staticmethod
    @unit_of_work('post_receiving')
    def post_receiving(ctx: AuthContext, receiving_id) -> Receiving:
        """DRAFT → POSTED, appending one IN movement per line."""
        require_inventory_writer(ctx)
        receiving_id = parse_uuid(receiving_id, 'receiving_id')
        ensure_no_active_opname(ctx.company_id)

        now = timezone.now()
        updated = (
            Receiving.objects
            .filter(pk=receiving_id, company_id=ctx.company_id, status=Receiving.Status.DRAFT)
            .update(status=Receiving.Status.POSTED, posted_at=now, updated_at=now)
        )
        if not updated:
            _raise_for_missed_transition(ctx, receiving_id, 'post')

        lines = list(
            ReceivingItem.objects
            .filter(receiving_id=receiving_id, company_id=ctx.company_id)
            .values('variant_id', 'quantity', 'note')
        )
        if not lines:
            raise InvalidInputError(detail='A receiving without items cannot be posted.')
        StockService.ensure_balance_within_limit(
            ctx.company_id, {line['variant_id']: line['quantity'] for line in lines},
        )
        StockService.append_movements(ctx.company_id, _in_movements(receiving_id, lines, ctx.actor_id))

        total_qty = _total_quantity(lines)
        AuditService.emit(
            ctx,
            action=AUDIT_RECEIVING_POSTED,
            target_type=AUDIT_TARGET_RECEIVING,
            target_id=receiving_id,
            metadata={'item_count': len(lines), 'total_qty': total_qty},
        )
        logger.info(
            'Receiving %s posted: company=%s items=%d total_qty=%s',
            receiving_id, ctx.company_id, len(lines), total_qty,
        )
        return Receiving.objects.get(pk=receiving_id)

    @staticmethod
    @unit_of_work('void_receiving')
    def void_receiving(ctx: AuthContext, receiving_id) -> Receiving:
        """DRAFT → VOID. No ledger effect; a POSTED receiving is never voided."""
        require_inventory_writer(ctx)
        receiving_id = parse_uuid(receiving_id, 'receiving_id')

        now = timezone.now()
        updated = (
            Receiving.objects
            .filter(pk=receiving_id, company_id=ctx.company_id, status=Receiving.Status.DRAFT)
            .update(status=Receiving.Status.VOID, voided_at=now, updated_at=now)
        )
        if not updated:
            _raise_for_missed_transition(ctx, receiving_id, 'void')

        AuditService.emit(
            ctx,
            action=AUDIT_RECEIVING_VOIDED,
            target_type=AUDIT_TARGET_RECEIVING,
            target_id=receiving_id,
        )
        logger.info('Receiving %s voided: company=%s', receiving_id, ctx.company_id)
        return Receiving.objects.get(pk=receiving_id)
