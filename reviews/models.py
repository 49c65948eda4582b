from django.conf import settings
from django.core.validators import MinValueValidator, MaxValueValidator
from django.db import models
from django.db.models import Count, Exists, OuterRef, Value
import uuid

from films.models import Film


MIN_RATING = 1
MAX_RATING = 10
COMMENT_MAX_LENGTH = 1000


class ReviewQuerySet(models.QuerySet):

    def with_stats(self, user=None):
        """ Annotate likes_count, comments_count and whether `user` liked each review """
        qs = self.annotate(
            likes_count=Count('likes', distinct=True),
            comments_count=Count('comments', distinct=True),
        )
        if user is not None and user.is_authenticated:
            return qs.annotate(
                is_liked=Exists(ReviewLike.objects.filter(review=OuterRef('pk'), user=user))
            )
        return qs.annotate(is_liked=Value(False, output_field=models.BooleanField()))

    def for_film(self, film_id):
        return self.filter(film_id=film_id).select_related('user')

    def by_user(self, user_id):
        return self.filter(user_id=user_id).select_related('film')


class Review(models.Model):
    """Model for a user's rating and optional review of a film"""
    review_id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='reviews')
    film = models.ForeignKey(Film, on_delete=models.CASCADE, related_name='reviews')
    rating = models.IntegerField(validators=[MinValueValidator(MIN_RATING), MaxValueValidator(MAX_RATING)])
    comment = models.TextField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = ReviewQuerySet.as_manager()

    class Meta:
        # One row per user/film: a user can only review a film once
        unique_together = ('user', 'film')
        indexes = [
            models.Index(fields=['film', '-created_at'], name='reviews_film_created_idx'),
        ]

    def __str__(self):
        return f"{self.user.username} rated {self.film.title} with {self.rating}"

    @staticmethod
    def is_valid_rating(value):
        return isinstance(value, int) and not isinstance(value, bool) and MIN_RATING <= value <= MAX_RATING


class ReviewLike(models.Model):
    """Model for a user liking a review"""
    like_id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='review_likes')
    review = models.ForeignKey(Review, on_delete=models.CASCADE, related_name='likes')
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        # A user can only like a review once
        unique_together = ('user', 'review')

    def __str__(self):
        return f"{self.user.username} likes review {self.review_id}"


class ReviewComment(models.Model):
    """Model for comments under a review"""
    comment_id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='review_comments')
    review = models.ForeignKey(Review, on_delete=models.CASCADE, related_name='comments')
    content = models.TextField(max_length=COMMENT_MAX_LENGTH)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"{self.user.username} on review {self.review_id}"
