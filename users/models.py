"""
Users — Models

Custom User model with UUID PK and email-based auth. system_role is the
platform-wide role; tenant roles come from companies.Membership.

@file users/models.py
"""

import uuid

from django.contrib.auth.models import AbstractBaseUser, PermissionsMixin
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from core.models import TimestampMixin
from users.managers import UserManager


class User(AbstractBaseUser, PermissionsMixin, TimestampMixin):
    """
    Platform user.

    A SUPERADMIN operates on any company it names explicitly. ADMIN and
    STAFF act inside the company of their single active membership.
    """

    class SystemRole(models.TextChoices):
        SUPERADMIN = 'SUPERADMIN', _('Superadmin')
        ADMIN = 'ADMIN', _('Admin')
        STAFF = 'STAFF', _('Staff')

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField(_('email'), unique=True)
    name = models.CharField(_('name'), max_length=150, blank=True)
    system_role = models.CharField(
        _('system role'), max_length=12,
        choices=SystemRole.choices, default=SystemRole.STAFF,
        db_index=True,
    )

    is_staff = models.BooleanField(_('staff status'), default=False)
    is_active = models.BooleanField(_('active'), default=True)
    date_joined = models.DateTimeField(_('date joined'), default=timezone.now)

    objects = UserManager()

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = []

    class Meta:
        verbose_name = _('user')
        verbose_name_plural = _('users')
        ordering = ['-created_at']

    def __str__(self):
        return self.name or self.email

    def get_full_name(self):
        return self.name or self.email

    def get_short_name(self):
        return self.name.split(' ', 1)[0] if self.name else self.email

    @property
    def is_superadmin(self) -> bool:
        return self.system_role == self.SystemRole.SUPERADMIN
