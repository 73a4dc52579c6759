"""
Stock — Django Admin Configuration

Read-only list of StockMovement. INSERT ONLY — model save() blocks updates;
delete() raises.

@file stock/admin.py
"""

from django.contrib import admin
from django.utils.translation import gettext_lazy as _

from .models import StockMovement


@admin.register(StockMovement)
class StockMovementAdmin(admin.ModelAdmin):
    list_display = (
        'created_at', 'company', 'variant', 'movement_type', 'quantity',
        'reference_type', 'reference_id', 'created_by',
    )
    list_filter = ('movement_type', 'reference_type', 'created_at')
    search_fields = ('reference_id', 'variant__name', 'variant__sku', 'note')
    readonly_fields = (
        'id', 'company', 'variant', 'movement_type', 'quantity',
        'reference_type', 'reference_id', 'note',
        'created_by', 'created_at', 'effective_at',
    )
    list_select_related = ('company', 'variant', 'variant__product', 'created_by')
    show_full_result_count = False
    list_per_page = 50
    date_hierarchy = 'created_at'
    ordering = ('-created_at',)

    fieldsets = (
        (_('Movement'), {
            'fields': ('id', 'company', 'variant', 'movement_type', 'quantity', 'note'),
        }),
        (_('Reference'), {
            'fields': ('reference_type', 'reference_id'),
        }),
        (_('Audit'), {
            'fields': ('created_by', 'created_at', 'effective_at'),
        }),
    )

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
