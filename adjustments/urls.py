"""
Adjustments — URL Configuration

@file adjustments/urls.py
"""

from rest_framework.routers import SimpleRouter

from .views import StockAdjustmentViewSet

router = SimpleRouter()
router.register('adjustments', StockAdjustmentViewSet, basename='adjustment')

urlpatterns = router.urls
