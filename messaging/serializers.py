from rest_framework import serializers

from .models import Message


class MessageSerializer(serializers.ModelSerializer):
    """Serializer for Message model"""
    sender_id = serializers.UUIDField(read_only=True)
    receiver_id = serializers.UUIDField(read_only=True)

    class Meta:
        model = Message
        fields = ['message_id', 'sender_id', 'receiver_id', 'content', 'read', 'created_at']
        read_only_fields = fields


class SendMessageSerializer(serializers.Serializer):
    receiver_id = serializers.UUIDField()
    # Length and blankness are business rules checked by send_message
    content = serializers.CharField(allow_blank=True, trim_whitespace=False)


class ConversationSerializer(serializers.Serializer):
    user = serializers.DictField(read_only=True)
    last_message = MessageSerializer(read_only=True)
    unread_count = serializers.IntegerField(read_only=True)
