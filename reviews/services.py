from django.db import IntegrityError, transaction

from cineconnect.exceptions import DomainError
from films.models import Film
from .models import Review, ReviewLike, ReviewComment, MIN_RATING, MAX_RATING, COMMENT_MAX_LENGTH


class ReviewError(DomainError):
    """ INVALID_RATING | INVALID_COMMENT | INVALID_CONTENT | FILM_NOT_FOUND | ALREADY_REVIEWED
        | REVIEW_NOT_FOUND | COMMENT_NOT_FOUND | FORBIDDEN
    """


def _check_rating(rating):
    if not Review.is_valid_rating(rating):
        raise ReviewError(f'Rating must be between {MIN_RATING} and {MAX_RATING}', 'INVALID_RATING')


def _check_comment(comment):
    if comment and len(comment) > COMMENT_MAX_LENGTH:
        raise ReviewError(f'Comment must be at most {COMMENT_MAX_LENGTH} characters', 'INVALID_COMMENT')


def _get_review(review_id):
    review = Review.objects.filter(review_id=review_id).first()
    if not review:
        raise ReviewError('Review not found', 'REVIEW_NOT_FOUND')
    return review


def _check_not_reviewed(user_id, film_id):
    if Review.objects.filter(user_id=user_id, film_id=film_id).exists():
        raise ReviewError('You have already reviewed this film', 'ALREADY_REVIEWED')


def create_review(user_id, film_id, rating, comment=None):
    """ Rate a film, a user can only review a given film once """
    _check_rating(rating)
    _check_comment(comment)

    if not Film.objects.filter(film_id=film_id).exists():
        raise ReviewError('Film not found', 'FILM_NOT_FOUND')

    _check_not_reviewed(user_id, film_id)

    try:
        with transaction.atomic():
            return Review.objects.create(
                user_id=user_id,
                film_id=film_id,
                rating=rating,
                comment=comment or None
            )
    except IntegrityError:
        # A concurrent duplicate submission got in first
        raise ReviewError('You have already reviewed this film', 'ALREADY_REVIEWED')


def update_review(review, **changes):
    """ Partial update of rating and/or comment, ownership is checked by the caller """
    if 'rating' in changes:
        _check_rating(changes['rating'])
        review.rating = changes['rating']
    if 'comment' in changes:
        _check_comment(changes['comment'])
        review.comment = changes['comment'] or None

    review.save()
    return review


def toggle_like(user_id, review_id):
    """ Like a review, or unlike it when already liked """
    review = _get_review(review_id)

    deleted, _ = ReviewLike.objects.filter(user_id=user_id, review=review).delete()
    liked = not deleted
    if liked:
        try:
            with transaction.atomic():
                ReviewLike.objects.create(user_id=user_id, review=review)
        except IntegrityError:
            # Double click: the other request already stored the like
            pass

    return {'liked': liked, 'likes_count': review.likes.count()}


def list_likers(review_id, limit=10):
    """ Most recent users who liked the review, with the total like count """
    review = _get_review(review_id)
    likes = review.likes.select_related('user').order_by('-created_at')[:limit]
    return {
        'users': [like.user.summary() for like in likes],
        'count': review.likes.count(),
    }


def comment_on_review(user_id, review_id, content):
    """ Add a comment, returns (comment, comments_count) """
    if not content or not content.strip():
        raise ReviewError('Comment content is required', 'INVALID_CONTENT')
    if len(content) > COMMENT_MAX_LENGTH:
        raise ReviewError(f'Comment must be at most {COMMENT_MAX_LENGTH} characters', 'INVALID_CONTENT')

    review = _get_review(review_id)
    comment = ReviewComment.objects.create(user_id=user_id, review=review, content=content.strip())
    return comment, review.comments.count()


def list_comments(review_id):
    """ Comments of a review, oldest first """
    review = _get_review(review_id)
    return review.comments.select_related('user').order_by('created_at')


def delete_comment(comment_id, user_id):
    comment = ReviewComment.objects.filter(comment_id=comment_id).first()
    if not comment:
        raise ReviewError('Comment not found', 'COMMENT_NOT_FOUND')
    if comment.user_id != user_id:
        raise ReviewError('You can only delete your own comments', 'FORBIDDEN')
    comment.delete()
