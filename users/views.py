import logging

from django.contrib.auth import authenticate
from rest_framework import viewsets, mixins, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated, AllowAny
from rest_framework.throttling import ScopedRateThrottle
from rest_framework.views import APIView
from rest_framework_simplejwt.exceptions import InvalidToken, TokenError
from rest_framework_simplejwt.serializers import TokenRefreshSerializer
from rest_framework_simplejwt.tokens import RefreshToken

from cineconnect.exceptions import ApiError
from cineconnect.responses import success, created, no_content
from .models import User
from .serializers import (
    UserSerializer, PublicUserSerializer, RegisterSerializer, LoginSerializer, ProfileUpdateSerializer
)
from .services import register_user, update_profile
from .tokens import issue_tokens, read_refresh_cookie, set_refresh_cookie, clear_refresh_cookie


logger = logging.getLogger(__name__)

ACCOUNT_ERROR_STATUSES = {
    'EMAIL_TAKEN': status.HTTP_409_CONFLICT,
    'USERNAME_TAKEN': status.HTTP_409_CONFLICT,
}


class AuthView(APIView):
    """ Base for the public auth endpoints: no auth, stricter throttle """
    authentication_classes = []
    permission_classes = [AllowAny]
    throttle_classes = [ScopedRateThrottle]
    throttle_scope = 'auth'
    domain_error_statuses = ACCOUNT_ERROR_STATUSES

    def get_authenticate_header(self, request):
        # DRF answers AuthenticationFailed with 403 unless the view names an auth scheme
        return 'Bearer realm="api"'


class RegisterView(AuthView):
    """ POST /auth/register/ """

    def post(self, request):
        serializer = RegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = register_user(**serializer.validated_data)
        logger.info("Registered user %s", user.user_id)

        access, refresh = issue_tokens(user)
        response = created({'user': UserSerializer(user).data, 'access': access})
        return set_refresh_cookie(response, refresh)


class LoginView(AuthView):
    """ POST /auth/login/ with email and password """

    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        user = authenticate(
            request,
            email=serializer.validated_data['email'],
            password=serializer.validated_data['password']
        )
        if user is None:
            raise ApiError(status.HTTP_401_UNAUTHORIZED, 'Invalid email or password')

        access, refresh = issue_tokens(user)
        response = success({'user': UserSerializer(user).data, 'access': access})
        return set_refresh_cookie(response, refresh)


class RefreshView(AuthView):
    """ POST /auth/refresh/ exchanges the refresh cookie (or body) for a new access token """

    def post(self, request):
        token = read_refresh_cookie(request) or request.data.get('refresh')
        if not token:
            raise ApiError(status.HTTP_401_UNAUTHORIZED, 'No refresh token provided')

        serializer = TokenRefreshSerializer(data={'refresh': token})
        try:
            serializer.is_valid(raise_exception=True)
        except TokenError as exc:
            # Garbage, expired and blacklisted tokens
            raise InvalidToken(exc.args[0])

        response = success({'access': serializer.validated_data['access']})
        # Rotation hands back a new refresh token, the old one is blacklisted
        new_refresh = serializer.validated_data.get('refresh')
        if new_refresh:
            set_refresh_cookie(response, new_refresh)
        return response


class LogoutView(AuthView):
    """ POST /auth/logout/ blacklists the refresh token and clears the cookie """

    def post(self, request):
        token = read_refresh_cookie(request) or request.data.get('refresh')
        if token:
            try:
                RefreshToken(token).blacklist()
            except TokenError as exc:
                # An expired or already revoked token is as good as logged out
                logger.info("Logout with unusable refresh token: %s", exc)

        return clear_refresh_cookie(no_content())


class UserViewSet(mixins.RetrieveModelMixin, viewsets.GenericViewSet):
    """ Viewset for User profiles

        - Public: retrieve another user's public profile
        - Authenticated: read and update your own profile at /users/me/
    """
    queryset = User.objects.filter(is_active=True)
    serializer_class = PublicUserSerializer
    lookup_value_regex = '[0-9a-fA-F-]{36}'
    domain_error_statuses = ACCOUNT_ERROR_STATUSES

    def get_permissions(self):
        """ Allow unauthenticated access to public profiles """
        if self.action == 'retrieve':
            return [AllowAny()]
        return [IsAuthenticated()]

    def retrieve(self, request, *args, **kwargs):
        return success(self.get_serializer(self.get_object()).data)

    @action(detail=False, methods=['get', 'patch'], url_path='me')
    def me(self, request):
        """ Read or partially update the authenticated user """
        if request.method == 'PATCH':
            serializer = ProfileUpdateSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            update_profile(request.user, **serializer.validated_data)

        return success(UserSerializer(request.user).data)
