from rest_framework import serializers

from .models import Review, ReviewComment, MIN_RATING, MAX_RATING, COMMENT_MAX_LENGTH


class ReviewSerializer(serializers.ModelSerializer):
    """Serializer for Review model, with like/comment counters when annotated"""
    user = serializers.SerializerMethodField()
    film_id = serializers.ReadOnlyField(source='film.film_id')
    likes_count = serializers.SerializerMethodField()
    comments_count = serializers.SerializerMethodField()
    is_liked = serializers.SerializerMethodField()

    class Meta:
        model = Review
        fields = ['review_id', 'user', 'film_id', 'rating', 'comment', 'likes_count',
                  'comments_count', 'is_liked', 'created_at', 'updated_at']

    def get_user(self, obj):
        return obj.user.summary()

    # The counters only exist on querysets built with Review.objects.with_stats()
    def get_likes_count(self, obj):
        return getattr(obj, 'likes_count', None)

    def get_comments_count(self, obj):
        return getattr(obj, 'comments_count', None)

    def get_is_liked(self, obj):
        return bool(getattr(obj, 'is_liked', False))


class UserReviewSerializer(ReviewSerializer):
    """Serializer for a user's reviews, embedding the reviewed film"""
    film = serializers.SerializerMethodField()

    class Meta(ReviewSerializer.Meta):
        fields = ReviewSerializer.Meta.fields + ['film']

    def get_film(self, obj):
        return obj.film.summary()


class ReviewCreateSerializer(serializers.Serializer):
    film_id = serializers.UUIDField()
    rating = serializers.IntegerField(min_value=MIN_RATING, max_value=MAX_RATING)
    comment = serializers.CharField(max_length=COMMENT_MAX_LENGTH, required=False, allow_blank=True, allow_null=True)


class ReviewUpdateSerializer(serializers.Serializer):
    rating = serializers.IntegerField(min_value=MIN_RATING, max_value=MAX_RATING, required=False)
    comment = serializers.CharField(max_length=COMMENT_MAX_LENGTH, required=False, allow_blank=True, allow_null=True)


class ReviewCommentSerializer(serializers.ModelSerializer):
    """Serializer for ReviewComment model"""
    user = serializers.SerializerMethodField()
    review_id = serializers.ReadOnlyField(source='review.review_id')

    class Meta:
        model = ReviewComment
        fields = ['comment_id', 'review_id', 'user', 'content', 'created_at', 'updated_at']

    def get_user(self, obj):
        return obj.user.summary()


class CommentCreateSerializer(serializers.Serializer):
    # Length and blankness are business rules checked by comment_on_review
    content = serializers.CharField(allow_blank=True, trim_whitespace=False)
