"""
Stock — URL Configuration

@file stock/urls.py
"""

from rest_framework.routers import SimpleRouter

from .views import StockMovementViewSet, StockViewSet

router = SimpleRouter()
router.register('stock', StockViewSet, basename='stock')
router.register('movements', StockMovementViewSet, basename='movement')

urlpatterns = router.urls
