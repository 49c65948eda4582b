from rest_framework import viewsets, mixins, status
from rest_framework.decorators import action

from cineconnect.pagination import ClampedPagination, clamp_int
from cineconnect.responses import success, created, no_content
from .models import Review
from .permissions import IsReviewAuthor
from .serializers import (
    ReviewSerializer, UserReviewSerializer, ReviewCreateSerializer, ReviewUpdateSerializer,
    ReviewCommentSerializer, CommentCreateSerializer
)
from . import services


UUID_PATTERN = '[0-9a-fA-F-]{36}'
USER_REVIEWS_LIMIT = 50
LIKERS_DEFAULT_LIMIT = 10
LIKERS_MAX_LIMIT = 100


class ReviewViewSet(mixins.RetrieveModelMixin, viewsets.GenericViewSet):
    """ Viewset for Review model with like and comment actions

            - Public: retrieve, film reviews, user reviews, likers, comments
            - Authenticated: create, like, comment
            - Author: update, delete (admins may delete too)
    """
    permission_classes = [IsReviewAuthor]
    pagination_class = ClampedPagination
    serializer_class = ReviewSerializer
    lookup_value_regex = UUID_PATTERN

    domain_error_statuses = {
        'INVALID_RATING': status.HTTP_400_BAD_REQUEST,
        'INVALID_COMMENT': status.HTTP_400_BAD_REQUEST,
        'INVALID_CONTENT': status.HTTP_400_BAD_REQUEST,
        'FORBIDDEN': status.HTTP_403_FORBIDDEN,
        'FILM_NOT_FOUND': status.HTTP_404_NOT_FOUND,
        'REVIEW_NOT_FOUND': status.HTTP_404_NOT_FOUND,
        'COMMENT_NOT_FOUND': status.HTTP_404_NOT_FOUND,
        'ALREADY_REVIEWED': status.HTTP_409_CONFLICT,
    }

    def get_queryset(self):
        return Review.objects.select_related('user', 'film').with_stats(self.request.user)

    def create(self, request):
        """ POST /reviews/ """
        serializer = ReviewCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        review = services.create_review(user_id=request.user.user_id, **serializer.validated_data)
        return created(ReviewSerializer(self.get_queryset().get(pk=review.pk)).data)

    def retrieve(self, request, *args, **kwargs):
        return success(self.get_serializer(self.get_object()).data)

    def partial_update(self, request, *args, **kwargs):
        """ PATCH /reviews/<id>/, author only """
        review = self.get_object()
        serializer = ReviewUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        services.update_review(review, **serializer.validated_data)
        return success(self.get_serializer(self.get_queryset().get(pk=review.pk)).data)

    def destroy(self, request, *args, **kwargs):
        """ DELETE /reviews/<id>/, author or admin """
        self.get_object().delete()
        return no_content()

    @action(detail=False, methods=['get'], url_path=rf'film/(?P<film_id>{UUID_PATTERN})')
    def film(self, request, film_id=None):
        """ Paginated reviews of a film, newest first """
        reviews = self.get_queryset().filter(film_id=film_id).order_by('-created_at')
        page = self.paginate_queryset(reviews)
        return self.get_paginated_response(self.get_serializer(page, many=True).data)

    @action(detail=False, methods=['get'], url_path=rf'user/(?P<user_id>{UUID_PATTERN})')
    def user(self, request, user_id=None):
        """ Latest reviews written by a user, with the reviewed film """
        reviews = self.get_queryset().filter(user_id=user_id).order_by('-created_at')[:USER_REVIEWS_LIMIT]
        return success(UserReviewSerializer(reviews, many=True).data)

    @action(detail=True, methods=['post'])
    def like(self, request, pk=None):
        """ Toggle the current user's like on a review """
        return success(services.toggle_like(request.user.user_id, pk))

    @action(detail=True, methods=['get'])
    def likes(self, request, pk=None):
        """ Users who liked a review """
        limit = clamp_int(request.query_params.get('limit'), LIKERS_DEFAULT_LIMIT, maximum=LIKERS_MAX_LIMIT)
        return success(services.list_likers(pk, limit))

    @action(detail=True, methods=['get', 'post'])
    def comments(self, request, pk=None):
        """ GET paginated comments, POST a new comment """
        if request.method == 'POST':
            serializer = CommentCreateSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            comment, comments_count = services.comment_on_review(
                request.user.user_id, pk, serializer.validated_data['content']
            )
            return created({
                'comment': ReviewCommentSerializer(comment).data,
                'comments_count': comments_count,
            })

        page = self.paginate_queryset(services.list_comments(pk))
        return self.get_paginated_response(ReviewCommentSerializer(page, many=True).data)

    @action(detail=True, methods=['delete'], url_path=rf'comments/(?P<comment_id>{UUID_PATTERN})')
    def delete_comment(self, request, pk=None, comment_id=None):
        """ Delete one of your comments """
        services.delete_comment(comment_id, request.user.user_id)
        return no_content()
