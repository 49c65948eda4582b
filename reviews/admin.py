from django.contrib import admin

from .models import Review, ReviewComment


@admin.register(Review)
class ReviewAdmin(admin.ModelAdmin):
    list_display = ['user', 'film', 'rating', 'created_at']
    list_filter = ['rating']
    search_fields = ['user__username', 'film__title']


@admin.register(ReviewComment)
class ReviewCommentAdmin(admin.ModelAdmin):
    list_display = ['user', 'review', 'created_at']
    search_fields = ['user__username', 'content']
