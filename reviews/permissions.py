from rest_framework.permissions import BasePermission


class IsReviewAuthor(BasePermission):
    """ Custom permission for Review """
    message = 'You can only change your own reviews'

    def has_permission(self, request, view):
        if request.method in ('GET', 'HEAD', 'OPTIONS'):
            return True

        # Only an authenticated user can write reviews, likes and comments
        return bool(request.user and request.user.is_authenticated)

    def has_object_permission(self, request, view, obj):
        # Read permissions are allowed to any request
        if request.method in ('GET', 'HEAD', 'OPTIONS'):
            return True

        if request.method in ('PUT', 'PATCH'):
            # Admins can't edit users reviews to avoid disputes and rating manipulation
            # Write permissions are only allowed to the author of the review
            return obj.user_id == request.user.user_id

        # Delete permissions are allowed to the author or admins
        return obj.user_id == request.user.user_id or request.user.is_staff
