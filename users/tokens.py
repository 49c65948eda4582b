from django.conf import settings
from rest_framework_simplejwt.tokens import RefreshToken


def issue_tokens(user):
    """ Return a fresh (access, refresh) pair for the user as strings """
    refresh = RefreshToken.for_user(user)
    return str(refresh.access_token), str(refresh)


def read_refresh_cookie(request):
    return request.COOKIES.get(settings.REFRESH_COOKIE['key'])


def set_refresh_cookie(response, refresh_token):
    cookie = settings.REFRESH_COOKIE
    response.set_cookie(
        cookie['key'],
        refresh_token,
        max_age=int(settings.SIMPLE_JWT['REFRESH_TOKEN_LIFETIME'].total_seconds()),
        path=cookie['path'],
        httponly=cookie['httponly'],
        secure=cookie['secure'],
        samesite=cookie['samesite'],
    )
    return response


def clear_refresh_cookie(response):
    cookie = settings.REFRESH_COOKIE
    response.delete_cookie(cookie['key'], path=cookie['path'], samesite=cookie['samesite'])
    return response
