from rest_framework import serializers

from .models import Film


class FilmSerializer(serializers.ModelSerializer):
    """Serializer for Film model"""

    class Meta:
        model = Film
        fields = ['film_id', 'imdb_id', 'title', 'year', 'poster', 'plot', 'director',
                  'actors', 'genre', 'runtime', 'imdb_rating', 'created_at', 'updated_at']
        read_only_fields = fields
