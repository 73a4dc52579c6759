"""
Core — Django Admin Configuration

Read-only admin for AuditLog.

@file core/admin.py
"""

from django.contrib import admin
from django.utils.html import format_html
from django.utils.translation import gettext_lazy as _

from core.models import AuditLog

# Colour per action domain (prefix before the dot).
ACTION_DOMAIN_COLORS = {
    'receiving': '#22c55e',
    'adjustment': '#f97316',
    'opname': '#3b82f6',
}


@admin.register(AuditLog)
class AuditLogAdmin(admin.ModelAdmin):

    list_display = ('timestamp', 'action_badge', 'target_type', 'target_id', 'company_id', 'actor')
    list_filter = ('action', 'target_type', 'timestamp')
    search_fields = ('target_id', 'company_id', 'actor__email')
    readonly_fields = (
        'id', 'company_id', 'actor', 'action', 'target_type', 'target_id',
        'metadata', 'timestamp',
    )
    date_hierarchy = 'timestamp'
    list_select_related = ('actor',)
    show_full_result_count = False
    list_per_page = 50
    ordering = ('-timestamp',)

    fieldsets = (
        (_('Event'), {'fields': ('id', 'action', 'timestamp', 'company_id', 'actor')}),
        (_('Target'), {'fields': ('target_type', 'target_id')}),
        (_('Metadata'), {'fields': ('metadata',), 'classes': ('collapse',)}),
    )

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False

    @admin.display(description=_('Action'))
    def action_badge(self, obj):
        domain = obj.action.split('.', 1)[0]
        color = ACTION_DOMAIN_COLORS.get(domain, '#6b7280')
        return format_html(
            '<span style="background:{}; color:#fff; padding:2px 8px; '
            'border-radius:4px; font-size:11px; font-weight:600;">{}</span>',
            color, obj.action,
        )
