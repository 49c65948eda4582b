from rest_framework import routers
from django.urls import path, include
from .views import FilmViewSet

router = routers.SimpleRouter()
router.register(r'films', FilmViewSet, basename='films')


urlpatterns = [
    path('', include(router.urls)),
]
