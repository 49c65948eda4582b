from django.contrib import admin
from django.urls import path, include
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView

from .views import health


api_v1 = [
    path('', include('users.urls')),
    path('', include('films.urls')),
    path('', include('reviews.urls')),
    path('', include('friends.urls')),
    path('', include('messaging.urls')),
    path('', include('watchlist.urls')),
]

urlpatterns = [
    path('admin/', admin.site.urls),
    path('health', health, name='health'),
    path('api/v1/', include(api_v1)),
    path('api/schema/', SpectacularAPIView.as_view(), name='schema'),
    path('api-docs/', SpectacularSwaggerView.as_view(url_name='schema'), name='api-docs'),
]
