"""
Core — Base Models & Audit Infrastructure

Reusable abstract models for timestamps, soft-delete and tenant scoping, plus
the AuditLog model that receives one row per successful inventory
transition.

@file core/models.py
"""

import uuid

from django.conf import settings
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _


# ---------------------------------------------------------------------------
# Abstract base models (mixins)
# ---------------------------------------------------------------------------

class TimestampMixin(models.Model):
    """Adds created_at / updated_at to any model."""

    created_at = models.DateTimeField(
        _('created at'), default=timezone.now, db_index=True,
    )
    updated_at = models.DateTimeField(
        _('updated at'), auto_now=True,
    )

    class Meta:
        abstract = True


class SoftDeleteMixin(models.Model):
    """
    Records are never physically removed; instead is_deleted, deleted_at,
    deleted_by are set.
    """

    is_deleted = models.BooleanField(_('deleted'), default=False, db_index=True)
    deleted_at = models.DateTimeField(_('deleted at'), null=True, blank=True)
    deleted_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True, blank=True,
        on_delete=models.SET_NULL,
        related_name='+',
        verbose_name=_('deleted by'),
    )

    class Meta:
        abstract = True

    def soft_delete(self, user=None):
        self.is_deleted = True
        self.deleted_at = timezone.now()
        self.deleted_by = user
        self.save(update_fields=['is_deleted', 'deleted_at', 'deleted_by', 'updated_at'])

    def restore(self, user=None):
        self.is_deleted = False
        self.deleted_at = None
        self.deleted_by = None
        self.save(update_fields=['is_deleted', 'deleted_at', 'deleted_by', 'updated_at'])


class BaseModel(TimestampMixin):
    """UUID PK + timestamps."""

    id = models.UUIDField(
        primary_key=True, default=uuid.uuid4, editable=False,
    )

    class Meta:
        abstract = True


class CompanyScopedModel(BaseModel):
    """
    Base for every tenant-owned row. company_id is present on headers and
    items alike so each query can be filtered by tenant without a join.
    """

    company = models.ForeignKey(
        'companies.Company',
        on_delete=models.PROTECT,
        related_name='+',
        verbose_name=_('company'),
    )

    class Meta:
        abstract = True


# ---------------------------------------------------------------------------
# Audit Log — append-only record of every inventory transition
# ---------------------------------------------------------------------------

class AuditLog(models.Model):
    """
    Append-only audit trail. One row per successful workflow transition
    (``receiving.posted``, ``opname.finalized`` ...).

    Written after the business transaction commits, so it never takes part
    in the ledger's own atomicity. company_id is resolved in the application
    layer.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    company_id = models.UUIDField(_('company ID'), db_index=True)
    actor = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True, blank=True,
        on_delete=models.SET_NULL,
        related_name='audit_logs',
        verbose_name=_('actor'),
    )
    action = models.CharField(_('action'), max_length=100, db_index=True)
    target_type = models.CharField(_('target type'), max_length=60, blank=True, default='')
    target_id = models.CharField(_('target ID'), max_length=40, blank=True, default='', db_index=True)
    metadata = models.JSONField(_('metadata'), null=True, blank=True)

    timestamp = models.DateTimeField(_('timestamp'), auto_now_add=True, db_index=True)

    class Meta:
        verbose_name = _('audit log')
        verbose_name_plural = _('audit logs')
        ordering = ['-timestamp']
        indexes = [
            models.Index(fields=['company_id', 'timestamp'], name='audit_company_ts_idx'),
            models.Index(fields=['target_type', 'target_id'], name='audit_target_idx'),
            models.Index(fields=['actor', 'timestamp'], name='audit_actor_ts_idx'),
        ]

    def __str__(self):
        return f'{self.action} {self.target_type}:{self.target_id} by {self.actor_id}'
