"""
Opnames — Models

A stock opname is a physical count. Starting one snapshots every active
variant's balance into StockOpnameItem rows; finalizing posts the counted
differences to the ledger as ADJUST movements.

State machine:
  IN_PROGRESS → FINALIZED
  IN_PROGRESS → VOID
FINALIZED and VOID are terminal. At most one IN_PROGRESS opname exists per
company (partial unique constraint).

@file opnames/models.py
"""

from decimal import Decimal

from django.conf import settings
from django.db import models
from django.db.models import Q
from django.utils.translation import gettext_lazy as _

from core.constants import NOTE_MAX_LENGTH, QUANTITY_DECIMAL_PLACES, QUANTITY_MAX_DIGITS
from core.models import CompanyScopedModel


class StockOpname(CompanyScopedModel):

    class Status(models.TextChoices):
        IN_PROGRESS = 'IN_PROGRESS', _('In progress')
        FINALIZED = 'FINALIZED', _('Finalized')
        VOID = 'VOID', _('Void')

    status = models.CharField(
        _('status'), max_length=12,
        choices=Status.choices, default=Status.IN_PROGRESS,
        db_index=True,
    )
    note = models.CharField(_('note'), max_length=NOTE_MAX_LENGTH, null=True, blank=True)

    started_at = models.DateTimeField(_('started at'), auto_now_add=True)
    started_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True, blank=True,
        on_delete=models.SET_NULL,
        related_name='+',
        verbose_name=_('started by'),
    )
    finalized_at = models.DateTimeField(_('finalized at'), null=True, blank=True)
    finalized_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True, blank=True,
        on_delete=models.SET_NULL,
        related_name='+',
        verbose_name=_('finalized by'),
    )
    voided_at = models.DateTimeField(_('voided at'), null=True, blank=True)
    voided_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True, blank=True,
        on_delete=models.SET_NULL,
        related_name='+',
        verbose_name=_('voided by'),
    )

    class Meta:
        verbose_name = _('stock opname')
        verbose_name_plural = _('stock opnames')
        ordering = ['-created_at']
        constraints = [
            models.UniqueConstraint(
                fields=['company'],
                condition=Q(status='IN_PROGRESS'),
                name='uniq_active_opname_per_company',
            ),
        ]
        indexes = [
            models.Index(fields=['company', 'status'], name='opname_company_status_idx'),
            models.Index(fields=['company', 'created_at'], name='opname_company_created_idx'),
        ]

    def __str__(self):
        return f'Opname {self.pk} [{self.status}]'

    @property
    def is_in_progress(self) -> bool:
        return self.status == self.Status.IN_PROGRESS


class StockOpnameItem(CompanyScopedModel):
    """One counted line per variant; diff_qty = counted_qty - system_qty."""

    opname = models.ForeignKey(
        StockOpname,
        on_delete=models.CASCADE,
        related_name='items',
        verbose_name=_('opname'),
    )
    variant = models.ForeignKey(
        'catalog.ProductVariant',
        on_delete=models.PROTECT,
        related_name='+',
        verbose_name=_('variant'),
    )
    system_qty = models.DecimalField(
        _('system quantity'),
        max_digits=QUANTITY_MAX_DIGITS, decimal_places=QUANTITY_DECIMAL_PLACES,
    )
    counted_qty = models.DecimalField(
        _('counted quantity'),
        max_digits=QUANTITY_MAX_DIGITS, decimal_places=QUANTITY_DECIMAL_PLACES,
    )
    diff_qty = models.DecimalField(
        _('difference'),
        max_digits=QUANTITY_MAX_DIGITS, decimal_places=QUANTITY_DECIMAL_PLACES,
        default=Decimal('0.00'),
    )

    class Meta:
        verbose_name = _('stock opname item')
        verbose_name_plural = _('stock opname items')
        ordering = ['created_at']
        constraints = [
            models.UniqueConstraint(fields=['opname', 'variant'], name='uniq_opname_variant'),
        ]

    def __str__(self):
        return f'{self.variant_id}: system={self.system_qty} counted={self.counted_qty}'
