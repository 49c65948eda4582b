from rest_framework import viewsets, status
from rest_framework.decorators import action

from cineconnect.responses import success, created, no_content
from .models import Friendship
from .serializers import FriendshipSerializer, FriendRequestSerializer, FriendRequestResponseSerializer
from . import services


UUID_PATTERN = '[0-9a-fA-F-]{36}'


class FriendViewSet(viewsets.GenericViewSet):
    """ Viewset for the authenticated user's friends and friend requests

            GET    /friends/                  accepted friends
            GET    /friends/requests/         requests waiting for my answer
            GET    /friends/requests/sent/    requests I sent
            POST   /friends/request/          send a request
            PATCH  /friends/requests/<id>/    accept or reject
            DELETE /friends/<id>/             unfriend or cancel
    """
    queryset = Friendship.objects.all()
    serializer_class = FriendshipSerializer
    pagination_class = None
    lookup_value_regex = UUID_PATTERN

    domain_error_statuses = {
        'SELF_REQUEST': status.HTTP_400_BAD_REQUEST,
        'ALREADY_RESPONDED': status.HTTP_400_BAD_REQUEST,
        'FORBIDDEN': status.HTTP_403_FORBIDDEN,
        'USER_NOT_FOUND': status.HTTP_404_NOT_FOUND,
        'REQUEST_NOT_FOUND': status.HTTP_404_NOT_FOUND,
        'NOT_FOUND': status.HTTP_404_NOT_FOUND,
        'ALREADY_FRIENDS': status.HTTP_409_CONFLICT,
        'REQUEST_PENDING': status.HTTP_409_CONFLICT,
    }

    def list(self, request):
        return success(services.list_friends(request.user.user_id))

    def destroy(self, request, pk=None):
        services.remove_friend(pk, request.user.user_id)
        return no_content()

    @action(detail=False, methods=['get'], url_path='requests')
    def pending_requests(self, request):
        return success(services.list_pending_requests(request.user.user_id))

    @action(detail=False, methods=['get'], url_path='requests/sent')
    def sent_requests(self, request):
        return success(services.list_sent_requests(request.user.user_id))

    @action(detail=False, methods=['post'], url_path='request')
    def send_request(self, request):
        serializer = FriendRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        friendship = services.send_friend_request(
            request.user.user_id,
            receiver_id=serializer.validated_data.get('user_id'),
            receiver_username=serializer.validated_data.get('username'),
        )
        return created(self.get_serializer(friendship).data)

    @action(detail=False, methods=['patch'], url_path=rf'requests/(?P<request_id>{UUID_PATTERN})')
    def respond(self, request, request_id=None):
        serializer = FriendRequestResponseSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        friendship = services.respond_to_friend_request(
            request_id, request.user.user_id, serializer.validated_data['accept']
        )
        return success(self.get_serializer(friendship).data)
