"""
Receivings — Django Admin Configuration

Read-only: receivings change state only through ReceivingService.

@file receivings/admin.py
"""

from django.contrib import admin

from .models import Receiving, ReceivingItem


class ReceivingItemInline(admin.TabularInline):
    model = ReceivingItem
    extra = 0
    fields = ('variant', 'quantity', 'note')
    readonly_fields = fields
    can_delete = False

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Receiving)
class ReceivingAdmin(admin.ModelAdmin):
    list_display = ('id', 'company', 'status', 'posted_at', 'voided_at', 'created_by', 'created_at')
    list_filter = ('status', 'created_at')
    search_fields = ('id', 'note')
    readonly_fields = (
        'id', 'company', 'status', 'note', 'posted_at', 'voided_at',
        'created_by', 'created_at', 'updated_at',
    )
    list_select_related = ('company', 'created_by')
    date_hierarchy = 'created_at'
    ordering = ('-created_at',)
    inlines = [ReceivingItemInline]

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
