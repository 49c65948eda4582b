from django.db import models
from django.contrib.auth.models import AbstractUser
import uuid


USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 30
PASSWORD_MIN_LENGTH = 8


class User(AbstractUser):
    """User model extending Django's AbstractUser, logging in with email"""
    user_id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField(unique=True)
    avatar_url = models.URLField(max_length=500, null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = ['username']

    def __str__(self):
        return f"{self.username} ({self.email})"

    def summary(self):
        """ Public projection shared by friends, messages and reviews """
        return {
            'user_id': str(self.user_id),
            'username': self.username,
            'avatar_url': self.avatar_url,
        }
