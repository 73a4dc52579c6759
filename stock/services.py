"""
Stock — Service Layer

Ledger store and balance resolver. Balances are derived on demand as the
signed sum of StockMovement rows; nothing here caches or stores them.
INSERT ONLY — never update or delete StockMovement.

@file stock/services.py
"""

import logging
from collections.abc import Iterable, Mapping
from decimal import Decimal
from typing import TypedDict
from uuid import UUID

from django.db.models import Case, DecimalField, F, OuterRef, Q, Subquery, Sum, Value, When
from django.db.models.functions import Coalesce

from catalog.services import active_variants
from core.constants import QUANTITY_DECIMAL_PLACES, QUANTITY_MAX, QUANTITY_MAX_DIGITS
from core.exceptions import InsufficientStockError, InvalidInputError

from .models import StockMovement

logger = logging.getLogger('stockledger')

ZERO = Decimal('0.00')

_quantity_field = DecimalField(max_digits=QUANTITY_MAX_DIGITS + 4, decimal_places=QUANTITY_DECIMAL_PLACES)


class MovementEntry(TypedDict, total=False):
    variant_id: UUID
    movement_type: str
    quantity: Decimal
    reference_type: str
    reference_id: UUID
    note: str | None
    created_by_id: UUID | None


def signed_delta(movement_type: str, quantity: Decimal) -> Decimal:
    """Contribution of one movement to the balance."""
    if movement_type == StockMovement.MovementType.IN:
        return quantity
    if movement_type == StockMovement.MovementType.OUT:
        return -quantity
    return quantity


def signed_quantity_expression():
    """SQL counterpart of signed_delta, for aggregation."""
    return Case(
        When(movement_type=StockMovement.MovementType.IN, then=F('quantity')),
        When(movement_type=StockMovement.MovementType.OUT, then=-F('quantity')),
        default=F('quantity'),
        output_field=_quantity_field,
    )


def balance_aggregate():
    return Coalesce(Sum(signed_quantity_expression()), Value(ZERO), output_field=_quantity_field)


def merge_variant_diffs(rows: Iterable[tuple[UUID, Decimal]]) -> dict[UUID, Decimal]:
    """Sum diffs per variant and drop variants whose total is zero."""
    merged: dict[UUID, Decimal] = {}
    for variant_id, diff in rows:
        merged[variant_id] = merged.get(variant_id, ZERO) + diff
    return {variant_id: diff for variant_id, diff in merged.items() if diff != 0}


def find_negative_balance(
    balances: Mapping[UUID, Decimal],
    diffs: Mapping[UUID, Decimal],
) -> tuple[UUID, Decimal, Decimal] | None:
    """Return (variant_id, balance, diff) for the first diff that would go below zero."""
    for variant_id, diff in diffs.items():
        balance = balances.get(variant_id, ZERO)
        if balance + diff < 0:
            return variant_id, balance, diff
    return None


def find_balance_overflow(
    balances: Mapping[UUID, Decimal],
    diffs: Mapping[UUID, Decimal],
) -> tuple[UUID, Decimal, Decimal] | None:
    """Return (variant_id, balance, diff) for the first diff that would exceed QUANTITY_MAX."""
    for variant_id, diff in diffs.items():
        balance = balances.get(variant_id, ZERO)
        if balance + diff > QUANTITY_MAX:
            return variant_id, balance, diff
    return None


class StockService:
    """Append-only ledger writes and derived balances, always scoped to one company."""

    @staticmethod
    def append_movements(
        company_id: UUID,
        entries: Iterable[MovementEntry],
    ) -> list[StockMovement]:
        """
        Bulk insert ``entries`` for ``company_id``.

        Runs inside the caller's transaction and performs no business
        validation; the calling workflow has already checked its rules.
        """
        movements = [
            StockMovement(
                company_id=company_id,
                variant_id=entry['variant_id'],
                movement_type=entry['movement_type'],
                quantity=entry['quantity'],
                reference_type=entry['reference_type'],
                reference_id=entry['reference_id'],
                note=entry.get('note'),
                created_by_id=entry.get('created_by_id'),
            )
            for entry in entries
        ]
        if not movements:
            return []
        created = StockMovement.objects.bulk_create(movements)
        logger.debug('Appended %d stock movements for company %s', len(created), company_id)
        return created

    @staticmethod
    def get_balances(company_id: UUID, variant_ids: Iterable[UUID]) -> dict[UUID, Decimal]:
        """Balance per requested variant; variants without movements map to 0."""
        wanted = list(dict.fromkeys(variant_ids))
        if not wanted:
            return {}
        rows = (
            StockMovement.objects
            .filter(company_id=company_id, variant_id__in=wanted)
            .values('variant_id')
            .order_by()
            .annotate(balance=balance_aggregate())
        )
        balances = {variant_id: ZERO for variant_id in wanted}
        for row in rows:
            balances[row['variant_id']] = row['balance']
        return balances

    @staticmethod
    def get_balance(company_id: UUID, variant_id: UUID) -> Decimal:
        return StockService.get_balances(company_id, [variant_id])[variant_id]

    @staticmethod
    def ensure_no_negative_balance(company_id: UUID, diffs_by_variant: Mapping[UUID, Decimal]) -> None:
        """
        Raise InsufficientStockError if applying ``diffs_by_variant`` would
        drive any balance below zero. Balances are read from the ledger, so
        call this inside the writing transaction after the tenant lock.
        """
        if not diffs_by_variant:
            return
        balances = StockService.get_balances(company_id, diffs_by_variant.keys())
        negative = find_negative_balance(balances, diffs_by_variant)
        if negative is not None:
            variant_id, balance, diff = negative
            logger.info(
                'Negative stock rejected: company=%s variant=%s balance=%s diff=%s',
                company_id, variant_id, balance, diff,
            )
            raise InsufficientStockError(
                detail=f'Insufficient stock for variant {variant_id}: balance={balance}, change={diff}.',
            )

    @staticmethod
    def ensure_balance_within_limit(company_id: UUID, diffs_by_variant: Mapping[UUID, Decimal]) -> None:
        """
        Raise InvalidInputError if applying ``diffs_by_variant`` would push
        any balance above QUANTITY_MAX, the largest value a quantity column
        holds.
        """
        increases = {variant_id: diff for variant_id, diff in diffs_by_variant.items() if diff > 0}
        if not increases:
            return
        balances = StockService.get_balances(company_id, increases.keys())
        overflow = find_balance_overflow(balances, increases)
        if overflow is not None:
            variant_id, balance, diff = overflow
            logger.info(
                'Balance limit exceeded: company=%s variant=%s balance=%s diff=%s',
                company_id, variant_id, balance, diff,
            )
            raise InvalidInputError(
                detail=f'Stock of variant {variant_id} would exceed {QUANTITY_MAX}: balance={balance}, change={diff}.',
            )

    @staticmethod
    def stock_table(company_id: UUID, search: str | None = None):
        """
        Active variants of the company annotated with their current
        ``balance``, for the stock listing. ``search`` matches product name,
        variant name, sku or barcode.
        """
        balance_sq = (
            StockMovement.objects
            .filter(company_id=company_id, variant_id=OuterRef('pk'))
            .values('variant_id')
            .order_by()
            .annotate(balance=Sum(signed_quantity_expression()))
            .values('balance')
        )
        qs = (
            active_variants(company_id)
            .select_related('product')
            .annotate(balance=Coalesce(
                Subquery(balance_sq, output_field=_quantity_field), Value(ZERO),
                output_field=_quantity_field,
            ))
            .order_by('product__name', 'name')
        )
        if search:
            term = search.strip()
            qs = qs.filter(
                Q(product__name__icontains=term)
                | Q(name__icontains=term)
                | Q(sku__icontains=term)
                | Q(barcode__icontains=term),
            )
        return qs

    @staticmethod
    def movement_history(
        company_id: UUID,
        *,
        variant_id: UUID | None = None,
        reference_type: str | None = None,
        reference_id: UUID | None = None,
    ):
        qs = (
            StockMovement.objects
            .filter(company_id=company_id)
            .select_related('variant', 'variant__product', 'created_by')
            .order_by('-created_at')
        )
        if variant_id is not None:
            qs = qs.filter(variant_id=variant_id)
        if reference_type:
            qs = qs.filter(reference_type=reference_type)
        if reference_id is not None:
            qs = qs.filter(reference_id=reference_id)
        return qs
