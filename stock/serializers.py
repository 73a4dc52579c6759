"""
Stock — Serializers

Read-only representations of the stock table and movement history.

@file stock/serializers.py
"""

from rest_framework import serializers

from catalog.models import ProductVariant

from .models import StockMovement


class StockRowSerializer(serializers.ModelSerializer):
    """One active variant with its derived balance (annotated as ``balance``)."""

    variant_id = serializers.UUIDField(source='pk', read_only=True)
    variant_name = serializers.CharField(source='name', read_only=True)
    product_id = serializers.UUIDField(read_only=True)
    product_name = serializers.CharField(source='product.name', read_only=True)
    balance = serializers.DecimalField(max_digits=18, decimal_places=2, read_only=True)

    class Meta:
        model = ProductVariant
        fields = [
            'variant_id', 'variant_name', 'product_id', 'product_name',
            'sku', 'barcode', 'selling_price', 'balance',
        ]
        read_only_fields = fields


class StockMovementSerializer(serializers.ModelSerializer):
    variant_name = serializers.CharField(source='variant.name', read_only=True)
    product_name = serializers.CharField(source='variant.product.name', read_only=True)
    created_by_email = serializers.EmailField(source='created_by.email', read_only=True, default=None)

    class Meta:
        model = StockMovement
        fields = [
            'id', 'variant', 'variant_name', 'product_name',
            'movement_type', 'quantity', 'reference_type', 'reference_id',
            'note', 'created_by', 'created_by_email', 'created_at', 'effective_at',
        ]
        read_only_fields = fields
