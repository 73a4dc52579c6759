"""
Adjustments — Views

@file adjustments/views.py
"""

from django.db.models import Count, DecimalField, Sum, Value
from django.db.models.functions import Coalesce
from rest_framework import mixins, status, viewsets
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from companies.permissions import CanWriteInventory, get_auth_context

from .models import StockAdjustment
from .serializers import (
    StockAdjustmentListSerializer,
    StockAdjustmentReadSerializer,
    StockAdjustmentWriteSerializer,
)
from .services import AdjustmentService


class StockAdjustmentViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.CreateModelMixin,
    viewsets.GenericViewSet,
):
    permission_classes = [IsAuthenticated, CanWriteInventory]
    search_fields = ['reason']
    ordering_fields = ['created_at']
    ordering = ['-created_at']

    def get_queryset(self):
        ctx = get_auth_context(self.request)
        qs = StockAdjustment.objects.filter(company_id=ctx.company_id)
        if self.action == 'list':
            return qs.annotate(
                item_count=Count('items'),
                total_qty_diff=Coalesce(
                    Sum('items__qty_diff'), Value(0),
                    output_field=DecimalField(max_digits=18, decimal_places=2),
                ),
            )
        return qs.prefetch_related('items__variant__product')

    def get_serializer_class(self):
        if self.action == 'list':
            return StockAdjustmentListSerializer
        if self.action == 'create':
            return StockAdjustmentWriteSerializer
        return StockAdjustmentReadSerializer

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        adjustment = AdjustmentService.create_adjustment(
            get_auth_context(request),
            reason=serializer.validated_data['reason'],
            items=serializer.validated_data['items'],
            note=serializer.validated_data.get('note'),
        )
        read_ser = StockAdjustmentReadSerializer(
            self.get_queryset().get(pk=adjustment.pk),
            context=self.get_serializer_context(),
        )
        return Response(read_ser.data, status=status.HTTP_201_CREATED)
