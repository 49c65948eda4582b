from rest_framework import viewsets, status
from rest_framework.decorators import action

from cineconnect.responses import success, created
from realtime.events import push_to_user
from realtime.protocol import EVENT_MESSAGE
from .models import Message
from .serializers import MessageSerializer, SendMessageSerializer, ConversationSerializer
from . import services


class MessageViewSet(viewsets.GenericViewSet):
    """ Viewset for direct messages of the authenticated user

            GET   /messages/                 conversations
            POST  /messages/                 send a message
            GET   /messages/<user_id>/       history with a user, marks it read
            PATCH /messages/<user_id>/read/  mark a conversation read
    """
    queryset = Message.objects.all()
    serializer_class = MessageSerializer
    pagination_class = None
    lookup_url_kwarg = 'user_id'
    lookup_value_regex = '[0-9a-fA-F-]{36}'

    domain_error_statuses = {
        'SELF_MESSAGE': status.HTTP_400_BAD_REQUEST,
        'INVALID_CONTENT': status.HTTP_400_BAD_REQUEST,
        'RECEIVER_NOT_FOUND': status.HTTP_404_NOT_FOUND,
    }

    def list(self, request):
        conversations = services.list_conversations(request.user.user_id)
        return success(ConversationSerializer(conversations, many=True).data)

    def create(self, request):
        serializer = SendMessageSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        message = services.send_message(request.user.user_id, **serializer.validated_data)
        data = self.get_serializer(message).data
        data['sender'] = request.user.summary()

        # Live delivery to the receiver's open tabs, the REST history covers offline users
        push_to_user(message.receiver_id, EVENT_MESSAGE, data)
        return created(data)

    def retrieve(self, request, user_id=None):
        payload = services.list_messages(
            request.user.user_id,
            user_id,
            page=request.query_params.get('page'),
            page_size=request.query_params.get('page_size'),
        )
        payload['items'] = self.get_serializer(payload['items'], many=True).data
        return success(payload)

    @action(detail=True, methods=['patch'])
    def read(self, request, user_id=None):
        updated = services.mark_conversation_read(request.user.user_id, user_id)
        return success({'updated': updated})
