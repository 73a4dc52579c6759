"""
Stock — Models

Movement-based, immutable stock ledger. Stock is never stored as a balance;
it is the signed sum of movements per (company, variant):
IN adds quantity, OUT subtracts it, ADJUST carries its own sign.
Records are INSERT ONLY — never update or delete.

@file stock/models.py
"""

import uuid

from django.conf import settings
from django.db import models
from django.db.models import Q
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from core.constants import QUANTITY_DECIMAL_PLACES, QUANTITY_MAX_DIGITS


class StockMovement(models.Model):
    """
    A single immutable stock movement (insert only).

    reference_type + reference_id point at the document that caused the
    movement (receiving, adjustment, opname ...). effective_at is the
    business time of the movement; created_at is when it was recorded.
    """

    class MovementType(models.TextChoices):
        IN = 'IN', _('In')
        OUT = 'OUT', _('Out')
        ADJUST = 'ADJUST', _('Adjust')

    class ReferenceType(models.TextChoices):
        RECEIVING = 'RECEIVING', _('Receiving')
        ADJUSTMENT = 'ADJUSTMENT', _('Adjustment')
        OPNAME = 'OPNAME', _('Stock opname')
        SALE = 'SALE', _('Sale')
        RETURN = 'RETURN', _('Return')

    id = models.UUIDField(
        primary_key=True, default=uuid.uuid4, editable=False,
    )
    company = models.ForeignKey(
        'companies.Company',
        on_delete=models.PROTECT,
        related_name='+',
        verbose_name=_('company'),
    )
    variant = models.ForeignKey(
        'catalog.ProductVariant',
        on_delete=models.PROTECT,
        related_name='stock_movements',
        verbose_name=_('variant'),
    )
    movement_type = models.CharField(
        _('movement type'), max_length=8,
        choices=MovementType.choices, db_index=True,
    )
    quantity = models.DecimalField(
        _('quantity'),
        max_digits=QUANTITY_MAX_DIGITS, decimal_places=QUANTITY_DECIMAL_PLACES,
        help_text=_('Positive for IN/OUT; signed and non-zero for ADJUST'),
    )
    reference_type = models.CharField(
        _('reference type'), max_length=12,
        choices=ReferenceType.choices,
    )
    reference_id = models.UUIDField(_('reference ID'))
    note = models.CharField(_('note'), max_length=500, null=True, blank=True)
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True, blank=True,
        on_delete=models.SET_NULL,
        related_name='+',
        verbose_name=_('created by'),
    )
    created_at = models.DateTimeField(
        _('created at'), auto_now_add=True, db_index=True,
    )
    effective_at = models.DateTimeField(_('effective at'), default=timezone.now)
    # No updated_at; rows are immutable.

    class Meta:
        verbose_name = _('stock movement')
        verbose_name_plural = _('stock movements')
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['company', 'variant'], name='stock_company_variant_idx'),
            models.Index(fields=['company', 'created_at'], name='stock_company_created_idx'),
            models.Index(fields=['reference_type', 'reference_id'], name='stock_reference_idx'),
        ]
        constraints = [
            models.CheckConstraint(
                condition=(
                    Q(movement_type__in=['IN', 'OUT'], quantity__gt=0)
                    | (Q(movement_type='ADJUST') & ~Q(quantity=0))
                ),
                name='stock_movement_quantity_sign',
            ),
        ]

    def __str__(self):
        return f'{self.movement_type} {self.quantity} variant={self.variant_id} company={self.company_id}'

    def save(self, *args, **kwargs):
        if self.pk and StockMovement.objects.filter(pk=self.pk).exists():
            raise NotImplementedError('StockMovement is insert-only; updates are not allowed.')
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise NotImplementedError('StockMovement records cannot be deleted.')
