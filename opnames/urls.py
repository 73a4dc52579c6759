"""
Opnames — URL Configuration

@file opnames/urls.py
"""

from rest_framework.routers import SimpleRouter

from .views import StockOpnameViewSet

router = SimpleRouter()
router.register('opnames', StockOpnameViewSet, basename='opname')

urlpatterns = router.urls
