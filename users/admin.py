"""
Users — Django Admin Configuration

@file users/admin.py
"""

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.utils.translation import gettext_lazy as _

from .models import User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    list_display = ('email', 'name', 'system_role', 'is_active', 'is_staff', 'date_joined')
    list_filter = ('system_role', 'is_active', 'is_staff', 'is_superuser')
    search_fields = ('email', 'name')
    readonly_fields = ('id', 'created_at', 'updated_at', 'date_joined', 'last_login')
    ordering = ('-created_at',)
    list_per_page = 30

    fieldsets = (
        (None, {'fields': ('id', 'email', 'password')}),
        (_('Profile'), {'fields': ('name', 'system_role')}),
        (_('Permissions'), {'fields': ('is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions')}),
        (_('Dates'), {'fields': ('date_joined', 'last_login', 'created_at', 'updated_at')}),
    )
    add_fieldsets = (
        (None, {
            'classes': ('wide',),
            'fields': ('email', 'name', 'system_role', 'password1', 'password2'),
        }),
    )
