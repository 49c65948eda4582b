import re

from django.utils.decorators import method_decorator
from django.views.decorators.cache import cache_page
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.filters import OrderingFilter
from rest_framework.permissions import AllowAny

from cineconnect.exceptions import ApiError
from cineconnect.responses import success
from reviews.models import Review
from reviews.serializers import ReviewSerializer
from .filters import FilmFilter
from .models import Film, IMDB_ID_PATTERN
from .serializers import FilmSerializer
from .services import get_or_create_film


RECENT_REVIEWS_ON_DETAIL = 10


class FilmViewSet(viewsets.ReadOnlyModelViewSet):
    """ Viewset for Film model, public and read only

        Films are created by mirroring them from the metadata provider
        through /films/imdb/<imdb_id>/
    """
    permission_classes = [AllowAny]
    filter_backends = [DjangoFilterBackend, OrderingFilter]
    filterset_class = FilmFilter
    queryset = Film.objects.all().order_by('-created_at')
    serializer_class = FilmSerializer
    lookup_value_regex = '[0-9a-fA-F-]{36}'

    # Sorting
    ordering_fields = ['title', 'year', 'created_at']
    ordering = ['-created_at']

    domain_error_statuses = {
        'FILM_NOT_FOUND': status.HTTP_404_NOT_FOUND,
        'METADATA_UNAVAILABLE': status.HTTP_502_BAD_GATEWAY,
    }

    # Cache list of films for 1 min, new films show up quickly enough
    @method_decorator(cache_page(60))
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)

    def retrieve(self, request, *args, **kwargs):
        """ Film details with its latest reviews """
        film = self.get_object()
        recent_reviews = (
            Review.objects.filter(film=film)
            .select_related('user')
            .with_stats(request.user)
            .order_by('-created_at')[:RECENT_REVIEWS_ON_DETAIL]
        )

        data = self.get_serializer(film).data
        data['recent_reviews'] = ReviewSerializer(recent_reviews, many=True).data
        return success(data)

    @action(detail=False, methods=['get'], url_path=r'imdb/(?P<imdb_id>[^/]+)')
    def imdb(self, request, imdb_id=None):
        """ Get a film by IMDb id, mirroring it from the metadata provider on first reference """
        if not re.fullmatch(IMDB_ID_PATTERN, imdb_id):
            raise ApiError.bad_request('Invalid IMDb ID format')

        film = get_or_create_film(imdb_id)
        return success(self.get_serializer(film).data)
