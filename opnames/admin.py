"""
Opnames — Django Admin Configuration

Read-only: opnames change state only through OpnameService.

@file opnames/admin.py
"""

from django.contrib import admin

from .models import StockOpname, StockOpnameItem


class StockOpnameItemInline(admin.TabularInline):
    model = StockOpnameItem
    extra = 0
    fields = ('variant', 'system_qty', 'counted_qty', 'diff_qty')
    readonly_fields = fields
    can_delete = False

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(StockOpname)
class StockOpnameAdmin(admin.ModelAdmin):
    list_display = ('id', 'company', 'status', 'started_at', 'finalized_at', 'voided_at')
    list_filter = ('status', 'started_at')
    search_fields = ('id', 'note')
    readonly_fields = (
        'id', 'company', 'status', 'note',
        'started_at', 'started_by', 'finalized_at', 'finalized_by',
        'voided_at', 'voided_by', 'created_at', 'updated_at',
    )
    list_select_related = ('company',)
    ordering = ('-created_at',)
    inlines = [StockOpnameItemInline]

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
