from rest_framework import serializers

from .models import Friendship


class FriendshipSerializer(serializers.ModelSerializer):
    """Serializer for a friend request row"""
    sender_id = serializers.ReadOnlyField(source='sender.user_id')
    receiver_id = serializers.ReadOnlyField(source='receiver.user_id')

    class Meta:
        model = Friendship
        fields = ['friendship_id', 'sender_id', 'receiver_id', 'status', 'created_at', 'updated_at']
        read_only_fields = fields


class FriendRequestSerializer(serializers.Serializer):
    """ The receiver is given by user_id or, failing that, by username """
    user_id = serializers.UUIDField(required=False)
    username = serializers.CharField(required=False, allow_blank=True)

    def validate(self, attrs):
        if not attrs.get('user_id') and not (attrs.get('username') or '').strip():
            raise serializers.ValidationError('Either user_id or username is required')
        return attrs


class FriendRequestResponseSerializer(serializers.Serializer):
    accept = serializers.BooleanField()
