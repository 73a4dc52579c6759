"""
Catalog — Service Layer

Variant lookups used by the inventory workflows.

@file catalog/services.py
"""

from collections.abc import Iterable
from uuid import UUID

from core.exceptions import InvalidInputError

from .models import ProductVariant


def active_variants(company_id: UUID):
    """Variants of ``company_id`` that are neither deleted nor under a deleted product."""
    return ProductVariant.objects.filter(
        company_id=company_id,
        is_deleted=False,
        product__is_deleted=False,
    )


def ensure_variants_belong_to_company(company_id: UUID, variant_ids: Iterable[UUID]) -> None:
    wanted = set(variant_ids)
    if not wanted:
        return
    found = set(active_variants(company_id).filter(pk__in=wanted).values_list('pk', flat=True))
    if found != wanted:
        raise InvalidInputError(detail='Some product variants are invalid or inactive.')
