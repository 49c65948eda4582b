from rest_framework import routers
from django.urls import path, include
from .views import WatchlistViewSet

router = routers.SimpleRouter()
router.register(r'watchlist', WatchlistViewSet, basename='watchlist')


urlpatterns = [
    path('', include(router.urls)),
]
