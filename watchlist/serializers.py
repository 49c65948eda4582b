from rest_framework import serializers

from .models import WatchlistItem


class WatchlistItemSerializer(serializers.ModelSerializer):
    """Serializer for WatchlistItem model, embedding the film"""
    film = serializers.SerializerMethodField()

    class Meta:
        model = WatchlistItem
        fields = ['item_id', 'film', 'added_at']
        read_only_fields = fields

    def get_film(self, obj):
        return obj.film.summary()


class AddToWatchlistSerializer(serializers.Serializer):
    film_id = serializers.UUIDField()
