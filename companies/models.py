"""
Companies — Models

Company is the tenant boundary for every inventory row. Membership binds a
user to at most one company with a tenant role.

@file companies/models.py
"""

from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _

from core.models import BaseModel


class Company(BaseModel):
    name = models.CharField(_('name'), max_length=200)
    slug = models.SlugField(_('slug'), max_length=100, unique=True)
    is_active = models.BooleanField(_('active'), default=True)

    class Meta:
        verbose_name = _('company')
        verbose_name_plural = _('companies')
        ordering = ['name']

    def __str__(self):
        return self.name


class Membership(BaseModel):
    """A user's role inside one company. A user has at most one membership."""

    class Role(models.TextChoices):
        ADMIN = 'ADMIN', _('Admin')
        STAFF = 'STAFF', _('Staff')

    class Status(models.TextChoices):
        ACTIVE = 'ACTIVE', _('Active')
        INACTIVE = 'INACTIVE', _('Inactive')

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='membership',
        verbose_name=_('user'),
    )
    company = models.ForeignKey(
        Company,
        on_delete=models.CASCADE,
        related_name='memberships',
        verbose_name=_('company'),
    )
    role = models.CharField(
        _('role'), max_length=8,
        choices=Role.choices, default=Role.STAFF,
    )
    status = models.CharField(
        _('status'), max_length=8,
        choices=Status.choices, default=Status.ACTIVE,
        db_index=True,
    )

    class Meta:
        verbose_name = _('membership')
        verbose_name_plural = _('memberships')
        indexes = [
            models.Index(fields=['company', 'status'], name='membership_company_status_idx'),
        ]

    def __str__(self):
        return f'{self.user_id} {self.role}@{self.company_id}'
