"""
StockLedger — Root URL Configuration

All API endpoints are namespaced under /api/v1/. Inventory routes live
under /api/v1/inventory/.

@file config/urls.py
"""

from django.contrib import admin
from django.urls import include, path
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.reverse import reverse
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

admin.site.site_header = 'StockLedger Administration'
admin.site.site_title = 'StockLedger'
admin.site.index_title = 'Inventory Ledger'


@api_view(['GET'])
@permission_classes([AllowAny])
def api_root(request, format=None):
    """StockLedger API v1 — endpoint directory."""
    def url(name):
        return reverse(f'api-v1:{name}', request=request, format=format)

    return Response({
        'auth': {
            'token': url('token-obtain'),
            'refresh': url('token-refresh'),
        },
        'inventory': {
            'stock': url('inventory:stock-list'),
            'movements': url('inventory:movement-list'),
            'receivings': url('inventory:receiving-list'),
            'adjustments': url('inventory:adjustment-list'),
            'opnames': url('inventory:opname-list'),
            'active_opname': url('inventory:opname-active'),
        },
    })


inventory_patterns = [
    path('', include('stock.urls')),
    path('', include('receivings.urls')),
    path('', include('adjustments.urls')),
    path('', include('opnames.urls')),
]

api_v1_patterns = [
    path('', api_root, name='api-root'),
    path('auth/token/', TokenObtainPairView.as_view(), name='token-obtain'),
    path('auth/token/refresh/', TokenRefreshView.as_view(), name='token-refresh'),
    path('inventory/', include((inventory_patterns, 'inventory'))),
]

urlpatterns = [
    path('admin/', admin.site.urls),

    # DRF session auth (powers the "Log in" button on the browsable API)
    path('api/auth/', include('rest_framework.urls', namespace='rest_framework')),

    # Versioned API
    path('api/v1/', include((api_v1_patterns, 'api-v1'))),
]
