from django.conf import settings
from django.db import models
from django.db.models import Q
import uuid


CONTENT_MAX_LENGTH = 2000


class MessageQuerySet(models.QuerySet):

    def conversation(self, user_a, user_b):
        """ Messages exchanged between two users, in both directions """
        return self.filter(
            Q(sender_id=user_a, receiver_id=user_b) | Q(sender_id=user_b, receiver_id=user_a)
        )

    def involving(self, user_id):
        return self.filter(Q(sender_id=user_id) | Q(receiver_id=user_id))

    def unread_from(self, sender_id, receiver_id):
        return self.filter(sender_id=sender_id, receiver_id=receiver_id, read=False)


class Message(models.Model):
    """Model for a direct message between two users"""
    message_id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    sender = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='sent_messages')
    receiver = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='received_messages')
    content = models.TextField(max_length=CONTENT_MAX_LENGTH)
    read = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    objects = MessageQuerySet.as_manager()

    class Meta:
        indexes = [
            models.Index(fields=['sender', 'receiver', '-created_at'], name='messages_pair_created_idx'),
            models.Index(fields=['receiver', 'read'], name='messages_receiver_read_idx'),
        ]

    def __str__(self):
        return f"{self.sender.username} -> {self.receiver.username}: {self.content[:30]}"
