from django.db import IntegrityError, transaction
from django.db.models import Q

from cineconnect.exceptions import DomainError
from .models import User


class AccountError(DomainError):
    """ EMAIL_TAKEN | USERNAME_TAKEN """


def _check_available(email, username):
    existing = User.objects.filter(Q(email__iexact=email) | Q(username__iexact=username)).first()
    if existing:
        if existing.email.lower() == email.lower():
            raise AccountError('Email already registered', 'EMAIL_TAKEN')
        raise AccountError('Username already taken', 'USERNAME_TAKEN')


def register_user(email, username, password):
    """ Create an account, refusing an email or username that is already in use """
    email = User.objects.normalize_email(email)
    username = username.strip()

    _check_available(email, username)

    try:
        with transaction.atomic():
            return User.objects.create_user(username=username, email=email, password=password)
    except IntegrityError:
        # Lost a race with a concurrent registration, re-check which field collided
        if User.objects.filter(email__iexact=email).exists():
            raise AccountError('Email already registered', 'EMAIL_TAKEN')
        raise AccountError('Username already taken', 'USERNAME_TAKEN')


def update_profile(user, **changes):
    """ Apply a partial profile update (username, avatar_url) """
    username = changes.get('username')
    if username:
        username = username.strip()
        taken = User.objects.filter(username__iexact=username).exclude(user_id=user.user_id)
        if taken.exists():
            raise AccountError('Username already taken', 'USERNAME_TAKEN')
        user.username = username

    if 'avatar_url' in changes:
        user.avatar_url = changes['avatar_url'] or None

    user.save()
    return user
