"""
Receivings — Serializers

Explicit field lists; no __all__. Write serializers only shape-check the
payload; ownership and state rules live in ReceivingService.

@file receivings/serializers.py
"""

from decimal import Decimal

from rest_framework import serializers

from core.constants import (
    ITEM_NOTE_MAX_LENGTH,
    MAX_DOCUMENT_ITEMS,
    NOTE_MAX_LENGTH,
    QUANTITY_DECIMAL_PLACES,
    QUANTITY_MAX,
    QUANTITY_MAX_DIGITS,
)

from .models import Receiving, ReceivingItem


class ReceivingItemReadSerializer(serializers.ModelSerializer):
    variant_name = serializers.CharField(source='variant.name', read_only=True)
    product_name = serializers.CharField(source='variant.product.name', read_only=True)

    class Meta:
        model = ReceivingItem
        fields = ['id', 'variant', 'variant_name', 'product_name', 'quantity', 'note']
        read_only_fields = fields


class ReceivingItemWriteSerializer(serializers.Serializer):
    variant_id = serializers.UUIDField()
    quantity = serializers.DecimalField(
        max_digits=QUANTITY_MAX_DIGITS, decimal_places=QUANTITY_DECIMAL_PLACES,
        min_value=Decimal('0.01'), max_value=QUANTITY_MAX,
    )
    note = serializers.CharField(
        max_length=ITEM_NOTE_MAX_LENGTH, required=False, allow_blank=True, allow_null=True,
    )


class ReceivingWriteSerializer(serializers.Serializer):
    status = serializers.ChoiceField(
        choices=[Receiving.Status.DRAFT, Receiving.Status.POSTED],
        default=Receiving.Status.DRAFT,
    )
    note = serializers.CharField(
        max_length=NOTE_MAX_LENGTH, required=False, allow_blank=True, allow_null=True,
    )
    items = ReceivingItemWriteSerializer(many=True, min_length=1, max_length=MAX_DOCUMENT_ITEMS)


class ReceivingListSerializer(serializers.ModelSerializer):
    """Header with ``item_count`` and ``total_qty`` annotations."""

    item_count = serializers.IntegerField(read_only=True)
    total_qty = serializers.DecimalField(max_digits=18, decimal_places=2, read_only=True)

    class Meta:
        model = Receiving
        fields = [
            'id', 'status', 'note', 'item_count', 'total_qty',
            'posted_at', 'voided_at', 'created_by', 'created_at', 'updated_at',
        ]
        read_only_fields = fields


class ReceivingReadSerializer(serializers.ModelSerializer):
    status_display = serializers.CharField(source='get_status_display', read_only=True)
    items = ReceivingItemReadSerializer(many=True, read_only=True)

    class Meta:
        model = Receiving
        fields = [
            'id', 'status', 'status_display', 'note', 'items',
            'posted_at', 'voided_at', 'created_by', 'created_at', 'updated_at',
        ]
        read_only_fields = fields
