"""
Receivings — Models

Goods-in documents. Posting a receiving appends one IN movement per line.

State machine:
  DRAFT → POSTED
  DRAFT → VOID
POSTED and VOID are terminal; a posted receiving is never voided.

@file receivings/models.py
"""

from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _

from core.constants import (
    ITEM_NOTE_MAX_LENGTH,
    NOTE_MAX_LENGTH,
    QUANTITY_DECIMAL_PLACES,
    QUANTITY_MAX_DIGITS,
)
from core.models import CompanyScopedModel


class Receiving(CompanyScopedModel):

    class Status(models.TextChoices):
        DRAFT = 'DRAFT', _('Draft')
        POSTED = 'POSTED', _('Posted')
        VOID = 'VOID', _('Void')

    status = models.CharField(
        _('status'), max_length=8,
        choices=Status.choices, default=Status.DRAFT,
        db_index=True,
    )
    note = models.CharField(_('note'), max_length=NOTE_MAX_LENGTH, null=True, blank=True)
    posted_at = models.DateTimeField(_('posted at'), null=True, blank=True)
    voided_at = models.DateTimeField(_('voided at'), null=True, blank=True)
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True, blank=True,
        on_delete=models.SET_NULL,
        related_name='+',
        verbose_name=_('created by'),
    )

    class Meta:
        verbose_name = _('receiving')
        verbose_name_plural = _('receivings')
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['company', 'status'], name='receiving_company_status_idx'),
            models.Index(fields=['company', 'created_at'], name='receiving_company_created_idx'),
        ]

    def __str__(self):
        return f'Receiving {self.pk} [{self.status}]'


class ReceivingItem(CompanyScopedModel):
    receiving = models.ForeignKey(
        Receiving,
        on_delete=models.CASCADE,
        related_name='items',
        verbose_name=_('receiving'),
    )
    variant = models.ForeignKey(
        'catalog.ProductVariant',
        on_delete=models.PROTECT,
        related_name='+',
        verbose_name=_('variant'),
    )
    quantity = models.DecimalField(
        _('quantity'),
        max_digits=QUANTITY_MAX_DIGITS, decimal_places=QUANTITY_DECIMAL_PLACES,
    )
    note = models.CharField(_('note'), max_length=ITEM_NOTE_MAX_LENGTH, null=True, blank=True)

    class Meta:
        verbose_name = _('receiving item')
        verbose_name_plural = _('receiving items')
        ordering = ['created_at']
        constraints = [
            models.UniqueConstraint(fields=['receiving', 'variant'], name='uniq_receiving_variant'),
            models.CheckConstraint(condition=models.Q(quantity__gt=0), name='receiving_item_qty_positive'),
        ]

    def __str__(self):
        return f'{self.variant_id} x {self.quantity}'
