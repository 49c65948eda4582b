from django.core.validators import RegexValidator
from django.db import models
import uuid


IMDB_ID_PATTERN = r'^tt\d{7,}\Z'


class Film(models.Model):
    """Model for films, mirrored from the metadata provider on first reference"""
    film_id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    imdb_id = models.CharField(
        max_length=20,
        unique=True,
        validators=[RegexValidator(IMDB_ID_PATTERN, 'Invalid IMDb ID format')]
    )
    title = models.CharField(max_length=500, db_index=True)
    year = models.CharField(max_length=10, blank=True)
    poster = models.TextField(blank=True)
    plot = models.TextField(blank=True)
    director = models.CharField(max_length=500, blank=True)
    actors = models.TextField(blank=True, help_text="Comma separated list of main cast members")
    genre = models.CharField(max_length=500, blank=True, help_text="Comma separated list of genres")
    runtime = models.CharField(max_length=50, blank=True)
    imdb_rating = models.CharField(max_length=10, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"{self.title} ({self.year})" if self.year else self.title

    def summary(self):
        """ Compact projection embedded in reviews and watchlist items """
        return {
            'film_id': str(self.film_id),
            'imdb_id': self.imdb_id,
            'title': self.title,
            'year': self.year,
            'poster': self.poster,
            'genre': self.genre,
        }
