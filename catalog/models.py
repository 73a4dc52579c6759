"""
Catalog — Models

Products and their sellable variants. Stock is tracked per variant. Both
are soft-deleted; a variant is usable for inventory only while neither it
nor its product is deleted.

@file catalog/models.py
"""

from decimal import Decimal

from django.db import models
from django.db.models import Q
from django.utils.translation import gettext_lazy as _

from core.models import CompanyScopedModel, SoftDeleteMixin


class Product(CompanyScopedModel, SoftDeleteMixin):
    name = models.CharField(_('name'), max_length=200)
    description = models.TextField(_('description'), blank=True, default='')

    class Meta:
        verbose_name = _('product')
        verbose_name_plural = _('products')
        ordering = ['name']
        indexes = [
            models.Index(fields=['company', 'is_deleted'], name='product_company_deleted_idx'),
        ]

    def __str__(self):
        return self.name


class ProductVariant(CompanyScopedModel, SoftDeleteMixin):
    product = models.ForeignKey(
        Product,
        on_delete=models.PROTECT,
        related_name='variants',
        verbose_name=_('product'),
    )
    name = models.CharField(_('name'), max_length=200)
    sku = models.CharField(_('SKU'), max_length=64, null=True, blank=True)
    barcode = models.CharField(_('barcode'), max_length=64, null=True, blank=True)
    selling_price = models.DecimalField(
        _('selling price'), max_digits=14, decimal_places=2, default=Decimal('0.00'),
    )

    class Meta:
        verbose_name = _('product variant')
        verbose_name_plural = _('product variants')
        ordering = ['product__name', 'name']
        constraints = [
            models.UniqueConstraint(
                fields=['company', 'sku'],
                condition=Q(sku__isnull=False),
                name='uniq_variant_sku_per_company',
            ),
            models.UniqueConstraint(
                fields=['company', 'barcode'],
                condition=Q(barcode__isnull=False),
                name='uniq_variant_barcode_per_company',
            ),
        ]
        indexes = [
            models.Index(fields=['company', 'is_deleted'], name='variant_company_deleted_idx'),
        ]

    def __str__(self):
        return f'{self.product.name} / {self.name}'
