from rest_framework import routers
from django.urls import path, include
from .views import UserViewSet, RegisterView, LoginView, RefreshView, LogoutView

router = routers.SimpleRouter()
router.register(r'users', UserViewSet, basename='users')


urlpatterns = [
    path('auth/register/', RegisterView.as_view(), name='auth-register'),
    path('auth/login/', LoginView.as_view(), name='auth-login'),
    path('auth/refresh/', RefreshView.as_view(), name='auth-refresh'),
    path('auth/logout/', LogoutView.as_view(), name='auth-logout'),
    path('', include(router.urls)),
]
