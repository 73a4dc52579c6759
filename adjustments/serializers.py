"""
Adjustments — Serializers

@file adjustments/serializers.py
"""

from rest_framework import serializers

from core.constants import (
    ITEM_NOTE_MAX_LENGTH,
    MAX_DOCUMENT_ITEMS,
    NOTE_MAX_LENGTH,
    QUANTITY_DECIMAL_PLACES,
    QUANTITY_MAX,
    QUANTITY_MAX_DIGITS,
    REASON_MAX_LENGTH,
)

from .models import StockAdjustment, StockAdjustmentItem


class StockAdjustmentItemReadSerializer(serializers.ModelSerializer):
    variant_name = serializers.CharField(source='variant.name', read_only=True)
    product_name = serializers.CharField(source='variant.product.name', read_only=True)

    class Meta:
        model = StockAdjustmentItem
        fields = ['id', 'variant', 'variant_name', 'product_name', 'qty_diff', 'note']
        read_only_fields = fields


class StockAdjustmentItemWriteSerializer(serializers.Serializer):
    variant_id = serializers.UUIDField()
    qty_diff = serializers.DecimalField(
        max_digits=QUANTITY_MAX_DIGITS, decimal_places=QUANTITY_DECIMAL_PLACES,
        min_value=-QUANTITY_MAX, max_value=QUANTITY_MAX,
    )
    note = serializers.CharField(
        max_length=ITEM_NOTE_MAX_LENGTH, required=False, allow_blank=True, allow_null=True,
    )

    def validate_qty_diff(self, value):
        if value == 0:
            raise serializers.ValidationError('qty_diff must not be zero.')
        return value


class StockAdjustmentWriteSerializer(serializers.Serializer):
    reason = serializers.CharField(max_length=REASON_MAX_LENGTH)
    note = serializers.CharField(
        max_length=NOTE_MAX_LENGTH, required=False, allow_blank=True, allow_null=True,
    )
    items = StockAdjustmentItemWriteSerializer(many=True, min_length=1, max_length=MAX_DOCUMENT_ITEMS)


class StockAdjustmentListSerializer(serializers.ModelSerializer):
    item_count = serializers.IntegerField(read_only=True)
    total_qty_diff = serializers.DecimalField(max_digits=18, decimal_places=2, read_only=True)

    class Meta:
        model = StockAdjustment
        fields = ['id', 'reason', 'note', 'item_count', 'total_qty_diff', 'created_by', 'created_at']
        read_only_fields = fields


class StockAdjustmentReadSerializer(serializers.ModelSerializer):
    items = StockAdjustmentItemReadSerializer(many=True, read_only=True)

    class Meta:
        model = StockAdjustment
        fields = ['id', 'reason', 'note', 'items', 'created_by', 'created_at']
        read_only_fields = fields
