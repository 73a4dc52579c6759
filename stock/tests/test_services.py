"""
Tests — StockService: ledger appends, derived balances, negative-stock
check and the read side (stock table, movement history).

@file stock/tests/test_services.py
"""

import uuid
from decimal import Decimal

import pytest

from core.constants import QUANTITY_MAX
from core.exceptions import InsufficientStockError, InvalidInputError
from stock.models import StockMovement
from stock.services import (
    StockService,
    find_balance_overflow,
    find_negative_balance,
    merge_variant_diffs,
    signed_delta,
)
from tests.factories import CompanyFactory, ProductVariantFactory, StockMovementFactory


pytestmark = pytest.mark.django_db


def _entry(variant, movement_type, quantity, **extra):
    return {
        'variant_id': variant.pk,
        'movement_type': movement_type,
        'quantity': Decimal(quantity),
        'reference_type': StockMovement.ReferenceType.ADJUSTMENT,
        'reference_id': uuid.uuid4(),
        **extra,
    }


class TestHelpers:

    def test_signed_delta(self):
        assert signed_delta('IN', Decimal('5')) == Decimal('5')
        assert signed_delta('OUT', Decimal('5')) == Decimal('-5')
        assert signed_delta('ADJUST', Decimal('-2')) == Decimal('-2')

    def test_merge_variant_diffs_sums_and_drops_zero(self):
        a, b = uuid.uuid4(), uuid.uuid4()
        merged = merge_variant_diffs([
            (a, Decimal('2')), (b, Decimal('1')), (a, Decimal('-0.5')), (b, Decimal('-1')),
        ])
        assert merged == {a: Decimal('1.5')}

    def test_find_negative_balance(self):
        a, b = uuid.uuid4(), uuid.uuid4()
        assert find_negative_balance({a: Decimal('5')}, {a: Decimal('-5')}) is None
        assert find_negative_balance({a: Decimal('5')}, {b: Decimal('-1')}) == (b, Decimal('0.00'), Decimal('-1'))


class TestGetBalances:

    def test_balance_empty_is_zero(self):
        variant = ProductVariantFactory()
        assert StockService.get_balance(variant.company_id, variant.pk) == Decimal('0')

    def test_balance_is_signed_sum(self):
        variant = ProductVariantFactory()
        StockService.append_movements(variant.company_id, [
            _entry(variant, 'IN', '10'),
            _entry(variant, 'OUT', '3.25'),
            _entry(variant, 'ADJUST', '-1.75'),
            _entry(variant, 'ADJUST', '0.5'),
        ])
        assert StockService.get_balance(variant.company_id, variant.pk) == Decimal('5.50')

    def test_batch_includes_absent_variants(self):
        company = CompanyFactory()
        stocked = ProductVariantFactory(product__company=company)
        empty = ProductVariantFactory(product__company=company)
        StockMovementFactory(variant=stocked, quantity=Decimal('4'))

        balances = StockService.get_balances(company.pk, [stocked.pk, empty.pk])
        assert balances == {stocked.pk: Decimal('4'), empty.pk: Decimal('0')}

    def test_balances_are_tenant_scoped(self):
        variant = ProductVariantFactory()
        StockMovementFactory(variant=variant, quantity=Decimal('7'))
        other = CompanyFactory()
        assert StockService.get_balance(other.pk, variant.pk) == Decimal('0')

    def test_balance_after_many_mixed_movements(self):
        variant = ProductVariantFactory()
        entries = []
        expected = Decimal('0')
        for i in range(1, 201):
            qty = Decimal(i) / 4
            if i % 3 == 0:
                entries.append(_entry(variant, 'OUT', str(qty)))
                expected -= qty
            elif i % 5 == 0:
                entries.append(_entry(variant, 'ADJUST', str(-qty)))
                expected -= qty
            else:
                entries.append(_entry(variant, 'IN', str(qty)))
                expected += qty
        StockService.append_movements(variant.company_id, entries)
        assert StockService.get_balance(variant.company_id, variant.pk) == expected


class TestAppendMovements:

    def test_empty_is_noop(self):
        company = CompanyFactory()
        assert StockService.append_movements(company.pk, []) == []
        assert StockMovement.objects.count() == 0

    def test_rows_carry_company_and_reference(self):
        variant = ProductVariantFactory()
        reference_id = uuid.uuid4()
        StockService.append_movements(variant.company_id, [
            _entry(variant, 'IN', '2', reference_id=reference_id, note='first delivery'),
        ])
        movement = StockMovement.objects.get()
        assert movement.company_id == variant.company_id
        assert movement.reference_id == reference_id
        assert movement.note == 'first delivery'


class TestEnsureNoNegativeBalance:

    def test_allows_reaching_zero(self):
        variant = ProductVariantFactory()
        StockMovementFactory(variant=variant, quantity=Decimal('5'))
        StockService.ensure_no_negative_balance(variant.company_id, {variant.pk: Decimal('-5')})

    def test_rejects_going_below_zero(self):
        variant = ProductVariantFactory()
        StockMovementFactory(variant=variant, quantity=Decimal('5'))
        with pytest.raises(InsufficientStockError) as exc_info:
            StockService.ensure_no_negative_balance(variant.company_id, {variant.pk: Decimal('-5.01')})
        assert exc_info.value.default_code == 'CONFLICT'


class TestEnsureBalanceWithinLimit:

    def test_find_balance_overflow(self):
        a = uuid.uuid4()
        assert find_balance_overflow({a: QUANTITY_MAX - 1}, {a: Decimal('1')}) is None
        assert find_balance_overflow({a: QUANTITY_MAX - 1}, {a: Decimal('2')}) == (
            a, QUANTITY_MAX - 1, Decimal('2'),
        )

    def test_rejects_exceeding_quantity_max(self):
        variant = ProductVariantFactory()
        StockMovementFactory(variant=variant, quantity=QUANTITY_MAX - 1)
        with pytest.raises(InvalidInputError) as exc_info:
            StockService.ensure_balance_within_limit(variant.company_id, {variant.pk: Decimal('1.01')})
        assert exc_info.value.default_code == 'INVALID_INPUT'

    def test_decreases_are_not_checked(self):
        variant = ProductVariantFactory()
        StockMovementFactory(variant=variant, quantity=QUANTITY_MAX)
        StockService.ensure_balance_within_limit(variant.company_id, {variant.pk: Decimal('-3')})


class TestReadSide:

    def test_stock_table_lists_active_variants_with_balance(self):
        company = CompanyFactory()
        stocked = ProductVariantFactory(product__company=company, product__name='Kopi Arabica')
        empty = ProductVariantFactory(product__company=company, product__name='Teh Hijau')
        gone = ProductVariantFactory(product__company=company)
        gone.soft_delete()
        StockMovementFactory(variant=stocked, quantity=Decimal('3'))

        rows = {row.pk: row.balance for row in StockService.stock_table(company.pk)}
        assert rows == {stocked.pk: Decimal('3'), empty.pk: Decimal('0')}

    def test_stock_table_search(self):
        company = CompanyFactory()
        match = ProductVariantFactory(product__company=company, product__name='Kopi Arabica')
        ProductVariantFactory(product__company=company, product__name='Teh Hijau')
        assert [row.pk for row in StockService.stock_table(company.pk, 'arabica')] == [match.pk]
        assert [row.pk for row in StockService.stock_table(company.pk, match.sku)] == [match.pk]

    def test_movement_history_filters(self):
        variant = ProductVariantFactory()
        other_variant = ProductVariantFactory(product__company=variant.company)
        target = StockMovementFactory(variant=variant)
        StockMovementFactory(variant=other_variant)

        by_variant = StockService.movement_history(variant.company_id, variant_id=variant.pk)
        assert list(by_variant) == [target]
        by_reference = StockService.movement_history(
            variant.company_id, reference_type='RECEIVING', reference_id=target.reference_id,
        )
        assert list(by_reference) == [target]
