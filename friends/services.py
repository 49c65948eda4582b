import logging

from django.db import IntegrityError, transaction

from cineconnect.exceptions import DomainError
from users.models import User
from .models import Friendship


logger = logging.getLogger(__name__)


class FriendshipError(DomainError):
    """ USER_NOT_FOUND | SELF_REQUEST | ALREADY_FRIENDS | REQUEST_PENDING | REQUEST_NOT_FOUND
        | ALREADY_RESPONDED | NOT_FOUND | FORBIDDEN
    """


def _resolve_receiver(receiver_id, receiver_username):
    if receiver_id:
        return User.objects.filter(user_id=receiver_id).first()
    if receiver_username and receiver_username.strip():
        return User.objects.filter(username=receiver_username.strip()).first()
    return None


def _check_no_open_relationship(user_a, user_b):
    existing = Friendship.objects.between(user_a, user_b).open().first()
    if existing is None:
        return
    if existing.status == Friendship.Status.ACCEPTED:
        raise FriendshipError('You are already friends', 'ALREADY_FRIENDS')
    raise FriendshipError('A friend request is already pending', 'REQUEST_PENDING')


def send_friend_request(sender_id, receiver_id=None, receiver_username=None):
    """ Send a friend request to a user given by id or username """
    receiver = _resolve_receiver(receiver_id, receiver_username)
    if receiver is None:
        raise FriendshipError('User not found', 'USER_NOT_FOUND')

    if str(receiver.user_id) == str(sender_id):
        raise FriendshipError('You cannot send a friend request to yourself', 'SELF_REQUEST')

    _check_no_open_relationship(sender_id, receiver.user_id)

    try:
        with transaction.atomic():
            friendship = Friendship.objects.create(sender_id=sender_id, receiver=receiver)
    except IntegrityError:
        # A crossing request between the same pair was stored first
        _check_no_open_relationship(sender_id, receiver.user_id)
        raise

    logger.info("Friend request %s sent from %s to %s", friendship.friendship_id, sender_id, receiver.user_id)
    return friendship


def respond_to_friend_request(request_id, user_id, accept):
    """ Accept or reject a pending request, only its receiver may answer """
    friendship = Friendship.objects.filter(friendship_id=request_id).first()
    if friendship is None:
        raise FriendshipError('Friend request not found', 'REQUEST_NOT_FOUND')

    if str(friendship.receiver_id) != str(user_id):
        raise FriendshipError('Only the receiver can respond to this request', 'FORBIDDEN')

    if friendship.status != Friendship.Status.PENDING:
        raise FriendshipError('This request has already been answered', 'ALREADY_RESPONDED')

    friendship.status = Friendship.Status.ACCEPTED if accept else Friendship.Status.REJECTED
    friendship.save(update_fields=['status', 'updated_at'])
    return friendship


def remove_friend(friendship_id, user_id):
    """ Delete the row whatever its status, which also cancels an outgoing request """
    friendship = Friendship.objects.filter(friendship_id=friendship_id).first()
    if friendship is None:
        raise FriendshipError('Friendship not found', 'NOT_FOUND')

    if not friendship.involves(user_id):
        raise FriendshipError('You are not part of this friendship', 'FORBIDDEN')

    friendship.delete()


def list_friends(user_id):
    friendships = (
        Friendship.objects.accepted_for(user_id)
        .select_related('sender', 'receiver')
        .order_by('-updated_at')
    )
    return [
        {
            'friendship_id': str(friendship.friendship_id),
            'user': friendship.other_party(user_id).summary(),
            'since': friendship.updated_at,
        }
        for friendship in friendships
    ]


def list_pending_requests(receiver_id):
    requests = (
        Friendship.objects.pending_for_receiver(receiver_id)
        .select_related('sender')
        .order_by('-created_at')
    )
    return [
        {
            'friendship_id': str(friendship.friendship_id),
            'user': friendship.sender.summary(),
            'created_at': friendship.created_at,
        }
        for friendship in requests
    ]


def list_sent_requests(sender_id):
    requests = Friendship.objects.sent_by(sender_id).select_related('receiver').order_by('-created_at')
    return [
        {
            'friendship_id': str(friendship.friendship_id),
            'user': friendship.receiver.summary(),
            'created_at': friendship.created_at,
        }
        for friendship in requests
    ]
