from rest_framework import routers
from django.urls import path, include
from .views import FriendViewSet

router = routers.SimpleRouter()
router.register(r'friends', FriendViewSet, basename='friends')


urlpatterns = [
    path('', include(router.urls)),
]
