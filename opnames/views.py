"""
Opnames — Views

DRF ViewSet for stock opnames: list, start, retrieve, active, and the
workflow actions count (PATCH an item), finalize and void.

@file opnames/views.py
"""

from django.db.models import Count, Q
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from companies.permissions import CanWriteInventory, get_auth_context

from .models import StockOpname
from .serializers import (
    CountedQtySerializer,
    StockOpnameItemSerializer,
    StockOpnameListSerializer,
    StockOpnameReadSerializer,
    StockOpnameStartSerializer,
)
from .services import OpnameService


class StockOpnameViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.CreateModelMixin,
    viewsets.GenericViewSet,
):
    permission_classes = [IsAuthenticated, CanWriteInventory]
    filterset_fields = ['status']
    ordering_fields = ['created_at']
    ordering = ['-created_at']

    def get_queryset(self):
        ctx = get_auth_context(self.request)
        qs = StockOpname.objects.filter(company_id=ctx.company_id)
        if self.action == 'list':
            return qs.annotate(
                item_count=Count('items'),
                diff_item_count=Count('items', filter=~Q(items__diff_qty=0)),
            )
        return qs.prefetch_related('items__variant__product')

    def get_serializer_class(self):
        if self.action == 'list':
            return StockOpnameListSerializer
        if self.action == 'create':
            return StockOpnameStartSerializer
        if self.action == 'count_item':
            return CountedQtySerializer
        return StockOpnameReadSerializer

    def _detail(self, opname_id):
        return StockOpnameReadSerializer(
            self.get_queryset().get(pk=opname_id),
            context=self.get_serializer_context(),
        ).data

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        opname = OpnameService.start_opname(
            get_auth_context(request),
            note=serializer.validated_data.get('note'),
        )
        return Response(self._detail(opname.pk), status=status.HTTP_201_CREATED)

    @action(detail=False, methods=['get'], url_path='active')
    def active(self, request):
        """The company's IN_PROGRESS opname, or null."""
        opname = OpnameService.get_active_opname(get_auth_context(request).company_id)
        if opname is None:
            return Response(None)
        return Response(StockOpnameReadSerializer(opname, context=self.get_serializer_context()).data)

    @action(detail=True, methods=['patch'], url_path=r'items/(?P<item_id>[^/.]+)')
    def count_item(self, request, pk=None, item_id=None):
        serializer = CountedQtySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        item = OpnameService.update_counted_qty(
            get_auth_context(request), pk, item_id, serializer.validated_data['counted_qty'],
        )
        return Response(StockOpnameItemSerializer(item).data, status=status.HTTP_200_OK)

    @action(detail=True, methods=['post'], url_path='finalize')
    def finalize(self, request, pk=None):
        opname = OpnameService.finalize_opname(get_auth_context(request), pk)
        return Response(self._detail(opname.pk), status=status.HTTP_200_OK)

    @action(detail=True, methods=['post'], url_path='void')
    def void(self, request, pk=None):
        opname = OpnameService.void_opname(get_auth_context(request), pk)
        return Response(self._detail(opname.pk), status=status.HTTP_200_OK)
