from django.contrib import admin

from .models import Film


@admin.register(Film)
class FilmAdmin(admin.ModelAdmin):
    list_display = ['title', 'year', 'imdb_id', 'imdb_rating', 'updated_at']
    search_fields = ['title', 'imdb_id', 'director']
