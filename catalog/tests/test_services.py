"""
Catalog — Service Tests

@file catalog/tests/test_services.py
"""

import uuid

import pytest
from django.db import IntegrityError

from catalog.services import active_variants, ensure_variants_belong_to_company
from core.exceptions import InvalidInputError
from tests.factories import CompanyFactory, ProductVariantFactory


pytestmark = pytest.mark.django_db


class TestActiveVariants:

    def test_excludes_deleted_variant_and_deleted_product(self):
        company = CompanyFactory()
        kept = ProductVariantFactory(product__company=company)
        deleted = ProductVariantFactory(product__company=company)
        deleted.soft_delete()
        orphaned = ProductVariantFactory(product__company=company)
        orphaned.product.soft_delete()
        ProductVariantFactory()  # other company

        assert list(active_variants(company.pk)) == [kept]


class TestEnsureVariantsBelongToCompany:

    def test_accepts_own_variants(self):
        variant = ProductVariantFactory()
        ensure_variants_belong_to_company(variant.company_id, [variant.pk])

    def test_rejects_foreign_or_unknown_variants(self):
        company = CompanyFactory()
        foreign = ProductVariantFactory()
        with pytest.raises(InvalidInputError):
            ensure_variants_belong_to_company(company.pk, [foreign.pk])
        with pytest.raises(InvalidInputError):
            ensure_variants_belong_to_company(company.pk, [uuid.uuid4()])


class TestVariantConstraints:

    def test_sku_unique_per_company(self):
        variant = ProductVariantFactory(sku='ABC')
        ProductVariantFactory(sku='ABC')  # another company
        with pytest.raises(IntegrityError):
            ProductVariantFactory(product__company=variant.company, sku='ABC')
