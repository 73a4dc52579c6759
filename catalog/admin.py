"""
Catalog — Django Admin Configuration

@file catalog/admin.py
"""

from django.contrib import admin

from .models import Product, ProductVariant


class ProductVariantInline(admin.TabularInline):
    model = ProductVariant
    extra = 0
    fields = ('name', 'sku', 'barcode', 'selling_price', 'is_deleted')
    readonly_fields = ('is_deleted',)


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ('name', 'company', 'is_deleted', 'created_at')
    list_filter = ('is_deleted', 'company')
    search_fields = ('name',)
    list_select_related = ('company',)
    inlines = [ProductVariantInline]


@admin.register(ProductVariant)
class ProductVariantAdmin(admin.ModelAdmin):
    list_display = ('name', 'product', 'sku', 'barcode', 'selling_price', 'company', 'is_deleted')
    list_filter = ('is_deleted', 'company')
    search_fields = ('name', 'sku', 'barcode', 'product__name')
    list_select_related = ('product', 'company')
    raw_id_fields = ('product',)
