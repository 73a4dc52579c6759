"""
Adjustments — Models

Manual stock corrections with a mandatory reason. Created and posted in one
step: each item produces one ADJUST movement carrying its signed qty_diff.
No lifecycle after creation.

@file adjustments/models.py
"""

from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _

from core.constants import (
    ITEM_NOTE_MAX_LENGTH,
    NOTE_MAX_LENGTH,
    QUANTITY_DECIMAL_PLACES,
    QUANTITY_MAX_DIGITS,
    REASON_MAX_LENGTH,
)
from core.models import CompanyScopedModel


class StockAdjustment(CompanyScopedModel):
    reason = models.CharField(_('reason'), max_length=REASON_MAX_LENGTH)
    note = models.CharField(_('note'), max_length=NOTE_MAX_LENGTH, null=True, blank=True)
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True, blank=True,
        on_delete=models.SET_NULL,
        related_name='+',
        verbose_name=_('created by'),
    )

    class Meta:
        verbose_name = _('stock adjustment')
        verbose_name_plural = _('stock adjustments')
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['company', 'created_at'], name='adjustment_company_created_idx'),
        ]

    def __str__(self):
        return f'Adjustment {self.pk}: {self.reason}'


class StockAdjustmentItem(CompanyScopedModel):
    adjustment = models.ForeignKey(
        StockAdjustment,
        on_delete=models.CASCADE,
        related_name='items',
        verbose_name=_('adjustment'),
    )
    variant = models.ForeignKey(
        'catalog.ProductVariant',
        on_delete=models.PROTECT,
        related_name='+',
        verbose_name=_('variant'),
    )
    qty_diff = models.DecimalField(
        _('quantity difference'),
        max_digits=QUANTITY_MAX_DIGITS, decimal_places=QUANTITY_DECIMAL_PLACES,
    )
    note = models.CharField(_('note'), max_length=ITEM_NOTE_MAX_LENGTH, null=True, blank=True)

    class Meta:
        verbose_name = _('stock adjustment item')
        verbose_name_plural = _('stock adjustment items')
        ordering = ['created_at']
        constraints = [
            models.UniqueConstraint(fields=['adjustment', 'variant'], name='uniq_adjustment_variant'),
            models.CheckConstraint(condition=~models.Q(qty_diff=0), name='adjustment_item_qty_nonzero'),
        ]

    def __str__(self):
        return f'{self.variant_id} {self.qty_diff:+}'
