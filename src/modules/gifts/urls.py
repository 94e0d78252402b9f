"""Gift URL configuration."""

from __future__ import annotations

from rest_framework.routers import DefaultRouter

from modules.gifts.views import GiftViewSet

router = DefaultRouter(trailing_slash=True)
router.register("gifts", GiftViewSet, basename="gift")

urlpatterns = router.urls
