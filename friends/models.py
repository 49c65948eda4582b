from django.conf import settings
from django.db import models
from django.db.models import Q
from django.db.models.functions import Greatest, Least
import uuid


class FriendshipQuerySet(models.QuerySet):

    def involving(self, user_id):
        return self.filter(Q(sender_id=user_id) | Q(receiver_id=user_id))

    def between(self, user_a, user_b):
        """ Rows between two users, whichever of them sent the request """
        return self.filter(
            Q(sender_id=user_a, receiver_id=user_b) | Q(sender_id=user_b, receiver_id=user_a)
        )

    def open(self):
        return self.filter(status__in=Friendship.OPEN_STATUSES)

    def accepted_for(self, user_id):
        return self.involving(user_id).filter(status=Friendship.Status.ACCEPTED)

    def pending_for_receiver(self, user_id):
        return self.filter(receiver_id=user_id, status=Friendship.Status.PENDING)

    def sent_by(self, user_id):
        return self.filter(sender_id=user_id, status=Friendship.Status.PENDING)


class Friendship(models.Model):
    """Model for a friend request between two users

        The row is directed (sender -> receiver) while the friendship it
        represents is symmetric: lookups go through `between()`
    """
    class Status(models.TextChoices):
        PENDING = 'pending', 'Pending'
        ACCEPTED = 'accepted', 'Accepted'
        REJECTED = 'rejected', 'Rejected'

    OPEN_STATUSES = [Status.PENDING, Status.ACCEPTED]

    friendship_id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    sender = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='sent_friend_requests')
    receiver = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='received_friend_requests'
    )
    status = models.CharField(max_length=10, choices=Status.choices, default=Status.PENDING)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = FriendshipQuerySet.as_manager()

    class Meta:
        db_table = 'friends'
        constraints = [
            # One pending or accepted row per unordered pair, rejected rows may pile up
            models.UniqueConstraint(
                Least('sender', 'receiver'),
                Greatest('sender', 'receiver'),
                condition=Q(status__in=['pending', 'accepted']),
                name='friends_one_open_per_pair',
            ),
        ]
        indexes = [
            models.Index(fields=['receiver', 'status'], name='friends_receiver_status_idx'),
        ]

    def __str__(self):
        return f"{self.sender.username} -> {self.receiver.username} ({self.status})"

    def other_party(self, user_id):
        return self.receiver if str(self.sender_id) == str(user_id) else self.sender

    def involves(self, user_id):
        return str(user_id) in (str(self.sender_id), str(self.receiver_id))
