"""
Opnames — Serializers

@file opnames/serializers.py
"""

from decimal import Decimal

from rest_framework import serializers

from core.constants import NOTE_MAX_LENGTH, QUANTITY_DECIMAL_PLACES, QUANTITY_MAX, QUANTITY_MAX_DIGITS

from .models import StockOpname, StockOpnameItem


class StockOpnameItemSerializer(serializers.ModelSerializer):
    variant_name = serializers.CharField(source='variant.name', read_only=True)
    product_name = serializers.CharField(source='variant.product.name', read_only=True)
    sku = serializers.CharField(source='variant.sku', read_only=True, default=None)

    class Meta:
        model = StockOpnameItem
        fields = [
            'id', 'variant', 'variant_name', 'product_name', 'sku',
            'system_qty', 'counted_qty', 'diff_qty', 'updated_at',
        ]
        read_only_fields = fields


class StockOpnameStartSerializer(serializers.Serializer):
    note = serializers.CharField(
        max_length=NOTE_MAX_LENGTH, required=False, allow_blank=True, allow_null=True,
    )


class CountedQtySerializer(serializers.Serializer):
    counted_qty = serializers.DecimalField(
        max_digits=QUANTITY_MAX_DIGITS, decimal_places=QUANTITY_DECIMAL_PLACES,
        min_value=Decimal('0'), max_value=QUANTITY_MAX,
    )


class StockOpnameListSerializer(serializers.ModelSerializer):
    item_count = serializers.IntegerField(read_only=True)
    diff_item_count = serializers.IntegerField(read_only=True)

    class Meta:
        model = StockOpname
        fields = [
            'id', 'status', 'note', 'item_count', 'diff_item_count',
            'started_at', 'started_by', 'finalized_at', 'finalized_by',
            'voided_at', 'voided_by', 'created_at',
        ]
        read_only_fields = fields


class StockOpnameReadSerializer(serializers.ModelSerializer):
    status_display = serializers.CharField(source='get_status_display', read_only=True)
    items = StockOpnameItemSerializer(many=True, read_only=True)

    class Meta:
        model = StockOpname
        fields = [
            'id', 'status', 'status_display', 'note', 'items',
            'started_at', 'started_by', 'finalized_at', 'finalized_by',
            'voided_at', 'voided_by', 'created_at', 'updated_at',
        ]
        read_only_fields = fields
