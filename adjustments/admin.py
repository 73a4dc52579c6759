"""
Adjustments — Django Admin Configuration

@file adjustments/admin.py
"""

from django.contrib import admin

from .models import StockAdjustment, StockAdjustmentItem


class StockAdjustmentItemInline(admin.TabularInline):
    model = StockAdjustmentItem
    extra = 0
    fields = ('variant', 'qty_diff', 'note')
    readonly_fields = fields
    can_delete = False

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(StockAdjustment)
class StockAdjustmentAdmin(admin.ModelAdmin):
    list_display = ('id', 'company', 'reason', 'created_by', 'created_at')
    search_fields = ('reason', 'note')
    readonly_fields = ('id', 'company', 'reason', 'note', 'created_by', 'created_at', 'updated_at')
    list_select_related = ('company', 'created_by')
    date_hierarchy = 'created_at'
    ordering = ('-created_at',)
    inlines = [StockAdjustmentItemInline]

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
