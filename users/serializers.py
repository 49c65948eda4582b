from rest_framework import serializers

from .models import User, USERNAME_MIN_LENGTH, USERNAME_MAX_LENGTH, PASSWORD_MIN_LENGTH


class UserSerializer(serializers.ModelSerializer):
    """Serializer for the authenticated user's own profile"""

    class Meta:
        model = User
        fields = ['user_id', 'email', 'username', 'avatar_url', 'created_at', 'updated_at']
        read_only_fields = fields


class PublicUserSerializer(serializers.ModelSerializer):
    """Serializer for another user's public profile, no email"""

    class Meta:
        model = User
        fields = ['user_id', 'username', 'avatar_url', 'created_at']
        read_only_fields = fields


class RegisterSerializer(serializers.Serializer):
    email = serializers.EmailField()
    username = serializers.CharField(min_length=USERNAME_MIN_LENGTH, max_length=USERNAME_MAX_LENGTH)
    password = serializers.CharField(min_length=PASSWORD_MIN_LENGTH, write_only=True, trim_whitespace=False)


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, trim_whitespace=False)


class ProfileUpdateSerializer(serializers.Serializer):
    username = serializers.CharField(min_length=USERNAME_MIN_LENGTH, max_length=USERNAME_MAX_LENGTH, required=False)
    avatar_url = serializers.URLField(max_length=500, required=False, allow_null=True)
