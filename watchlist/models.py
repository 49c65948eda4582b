from django.conf import settings
from django.db import models
import uuid

from films.models import Film


class WatchlistItem(models.Model):
    """Model for a film a user wants to watch"""
    item_id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='watchlist')
    film = models.ForeignKey(Film, on_delete=models.CASCADE, related_name='watchlisted_by')
    added_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        # One row per user/film: a film is on a user's watchlist at most once
        unique_together = ('user', 'film')

    def __str__(self):
        return f"{self.user.username} wants to watch {self.film.title}"
