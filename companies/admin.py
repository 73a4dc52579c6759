"""
Companies — Django Admin Configuration

@file companies/admin.py
"""

from django.contrib import admin

from .models import Company, Membership


class MembershipInline(admin.TabularInline):
    model = Membership
    extra = 0
    raw_id_fields = ('user',)
    fields = ('user', 'role', 'status', 'created_at')
    readonly_fields = ('created_at',)


@admin.register(Company)
class CompanyAdmin(admin.ModelAdmin):
    list_display = ('name', 'slug', 'is_active', 'created_at')
    list_filter = ('is_active',)
    search_fields = ('name', 'slug')
    prepopulated_fields = {'slug': ('name',)}
    inlines = [MembershipInline]


@admin.register(Membership)
class MembershipAdmin(admin.ModelAdmin):
    list_display = ('user', 'company', 'role', 'status', 'created_at')
    list_filter = ('role', 'status')
    search_fields = ('user__email', 'company__name')
    list_select_related = ('user', 'company')
    raw_id_fields = ('user', 'company')
