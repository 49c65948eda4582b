import logging

from django.db.models import Count, IntegerField, OuterRef, Q, Subquery
from django.db.models.functions import Coalesce

from cineconnect.exceptions import DomainError
from cineconnect.pagination import clamp_int, paginated_payload
from users.models import User
from .models import Message, CONTENT_MAX_LENGTH


logger = logging.getLogger(__name__)

MESSAGES_PAGE_SIZE = 50
MESSAGES_MAX_PAGE_SIZE = 100


class MessagingError(DomainError):
    """ SELF_MESSAGE | INVALID_CONTENT | RECEIVER_NOT_FOUND """


def send_message(sender_id, receiver_id, content):
    if str(sender_id) == str(receiver_id):
        raise MessagingError('You cannot send a message to yourself', 'SELF_MESSAGE')

    if not content or not content.strip():
        raise MessagingError('Message content is required', 'INVALID_CONTENT')
    if len(content) > CONTENT_MAX_LENGTH:
        raise MessagingError(f'Message must be at most {CONTENT_MAX_LENGTH} characters', 'INVALID_CONTENT')

    if not User.objects.filter(user_id=receiver_id).exists():
        raise MessagingError('Receiver not found', 'RECEIVER_NOT_FOUND')

    return Message.objects.create(sender_id=sender_id, receiver_id=receiver_id, content=content)


def list_conversations(user_id):
    """ One entry per conversation partner, most recent conversation first

        Each entry carries the partner's summary, the last message exchanged
        and how many of the partner's messages the user hasn't read yet
    """
    last_message = Message.objects.conversation(user_id, OuterRef('pk')).order_by('-created_at')
    unread = (
        Message.objects.unread_from(OuterRef('pk'), user_id)
        .values('sender_id')
        .annotate(total=Count('pk'))
        .values('total')
    )

    partners = (
        User.objects.filter(
            Q(pk__in=Message.objects.filter(sender_id=user_id).values('receiver_id'))
            | Q(pk__in=Message.objects.filter(receiver_id=user_id).values('sender_id'))
        )
        .annotate(
            last_message_id=Subquery(last_message.values('message_id')[:1]),
            last_message_at=Subquery(last_message.values('created_at')[:1]),
            unread_count=Coalesce(Subquery(unread, output_field=IntegerField()), 0),
        )
        .order_by('-last_message_at')
    )
    partners = list(partners)

    messages = Message.objects.in_bulk([partner.last_message_id for partner in partners])
    return [
        {
            'user': partner.summary(),
            'last_message': messages[partner.last_message_id],
            'unread_count': partner.unread_count,
        }
        for partner in partners
    ]


def mark_conversation_read(current_user_id, other_user_id):
    """ Flag the partner's messages to the current user as read, returns how many changed """
    return Message.objects.unread_from(other_user_id, current_user_id).update(read=True)


def list_messages(current_user_id, other_user_id, page=1, page_size=MESSAGES_PAGE_SIZE):
    """ A page of the conversation, newest page first with items in chronological order

        Reading a conversation marks what the partner sent as read before the
        page is fetched
    """
    page = clamp_int(page, 1)
    page_size = clamp_int(page_size, MESSAGES_PAGE_SIZE, maximum=MESSAGES_MAX_PAGE_SIZE)

    marked = mark_conversation_read(current_user_id, other_user_id)
    if marked:
        logger.debug("Marked %s messages from %s to %s as read", marked, other_user_id, current_user_id)

    conversation = Message.objects.conversation(current_user_id, other_user_id)
    total = conversation.count()
    offset = (page - 1) * page_size
    messages = list(conversation.order_by('-created_at')[offset:offset + page_size])
    messages.reverse()

    return paginated_payload(messages, total, page, page_size)
