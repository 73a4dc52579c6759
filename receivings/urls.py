"""
Receivings — URL Configuration

@file receivings/urls.py
"""

from rest_framework.routers import SimpleRouter

from .views import ReceivingViewSet

router = SimpleRouter()
router.register('receivings', ReceivingViewSet, basename='receiving')

urlpatterns = router.urls
