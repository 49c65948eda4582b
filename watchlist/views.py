from rest_framework import viewsets, status
from rest_framework.decorators import action

from cineconnect.responses import success, created, no_content
from .models import WatchlistItem
from .serializers import WatchlistItemSerializer, AddToWatchlistSerializer
from . import services


UUID_PATTERN = '[0-9a-fA-F-]{36}'


class WatchlistViewSet(viewsets.GenericViewSet):
    """ Viewset for the authenticated user's watchlist, films are addressed by film_id """
    queryset = WatchlistItem.objects.all()
    serializer_class = WatchlistItemSerializer
    pagination_class = None
    lookup_url_kwarg = 'film_id'
    lookup_value_regex = UUID_PATTERN

    domain_error_statuses = {
        'FILM_NOT_FOUND': status.HTTP_404_NOT_FOUND,
        'NOT_IN_WATCHLIST': status.HTTP_404_NOT_FOUND,
        'ALREADY_IN_WATCHLIST': status.HTTP_409_CONFLICT,
    }

    def list(self, request):
        watchlist = services.get_watchlist(request.user.user_id)
        return success({
            'items': self.get_serializer(watchlist['items'], many=True).data,
            'count': watchlist['count'],
        })

    def create(self, request):
        serializer = AddToWatchlistSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        item = services.add_to_watchlist(request.user.user_id, serializer.validated_data['film_id'])
        return created(self.get_serializer(item).data)

    def destroy(self, request, film_id=None):
        services.remove_from_watchlist(request.user.user_id, film_id)
        return no_content()

    @action(detail=False, methods=['get'], url_path=rf'check/(?P<film_id>{UUID_PATTERN})')
    def check(self, request, film_id=None):
        return success({'in_watchlist': services.is_in_watchlist(request.user.user_id, film_id)})
