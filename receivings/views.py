"""
Receivings — Views

DRF ViewSet for goods-in documents: list, create, retrieve, and the
workflow actions post and void.

@file receivings/views.py
"""

from django.db.models import Count, DecimalField, Sum, Value
from django.db.models.functions import Coalesce
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from companies.permissions import CanWriteInventory, get_auth_context

from .models import Receiving
from .serializers import ReceivingListSerializer, ReceivingReadSerializer, ReceivingWriteSerializer
from .services import ReceivingService


class ReceivingViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.CreateModelMixin,
    viewsets.GenericViewSet,
):
    permission_classes = [IsAuthenticated, CanWriteInventory]
    filterset_fields = ['status']
    ordering_fields = ['created_at', 'posted_at']
    ordering = ['-created_at']

    def get_queryset(self):
        ctx = get_auth_context(self.request)
        qs = Receiving.objects.filter(company_id=ctx.company_id)
        if self.action == 'list':
            return qs.annotate(
                item_count=Count('items'),
                total_qty=Coalesce(
                    Sum('items__quantity'), Value(0),
                    output_field=DecimalField(max_digits=18, decimal_places=2),
                ),
            )
        return qs.prefetch_related('items__variant__product')

    def get_serializer_class(self):
        if self.action == 'list':
            return ReceivingListSerializer
        if self.action == 'create':
            return ReceivingWriteSerializer
        return ReceivingReadSerializer

    def _detail(self, receiving_id):
        return ReceivingReadSerializer(
            self.get_queryset().get(pk=receiving_id),
            context=self.get_serializer_context(),
        ).data

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        receiving = ReceivingService.create_receiving(
            get_auth_context(request),
            status=serializer.validated_data['status'],
            items=serializer.validated_data['items'],
            note=serializer.validated_data.get('note'),
        )
        return Response(self._detail(receiving.pk), status=status.HTTP_201_CREATED)

    @action(detail=True, methods=['post'], url_path='post')
    def post_receiving(self, request, pk=None):
        receiving = ReceivingService.post_receiving(get_auth_context(request), pk)
        return Response(self._detail(receiving.pk), status=status.HTTP_200_OK)

    @action(detail=True, methods=['post'], url_path='void')
    def void(self, request, pk=None):
        receiving = ReceivingService.void_receiving(get_auth_context(request), pk)
        return Response(self._detail(receiving.pk), status=status.HTTP_200_OK)
