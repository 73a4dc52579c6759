"""
Stock — Views

Read-only stock table (balances per active variant) and movement history,
both scoped to the caller's company.

@file stock/views.py
"""

from rest_framework import mixins, viewsets
from rest_framework.permissions import IsAuthenticated

from companies.permissions import HasInventoryScope, get_auth_context
from core.validators import parse_uuid

from .serializers import StockMovementSerializer, StockRowSerializer
from .services import StockService


class StockViewSet(mixins.ListModelMixin, viewsets.GenericViewSet):
    """GET stock/?search=… — active variants with their current balance."""

    permission_classes = [IsAuthenticated, HasInventoryScope]
    serializer_class = StockRowSerializer
    filter_backends = []

    def get_queryset(self):
        ctx = get_auth_context(self.request)
        return StockService.stock_table(ctx.company_id, self.request.query_params.get('search'))


class StockMovementViewSet(mixins.ListModelMixin, viewsets.GenericViewSet):
    """GET movements/?variant=…&reference_type=…&reference_id=…"""

    permission_classes = [IsAuthenticated, HasInventoryScope]
    serializer_class = StockMovementSerializer
    filter_backends = []

    def get_queryset(self):
        ctx = get_auth_context(self.request)
        params = self.request.query_params
        variant = params.get('variant')
        reference_id = params.get('reference_id')
        return StockService.movement_history(
            ctx.company_id,
            variant_id=parse_uuid(variant, 'variant') if variant else None,
            reference_type=params.get('reference_type'),
            reference_id=parse_uuid(reference_id, 'reference_id') if reference_id else None,
        )
