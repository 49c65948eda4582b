from django.db import IntegrityError, transaction

from cineconnect.exceptions import DomainError
from films.models import Film
from .models import WatchlistItem


class WatchlistError(DomainError):
    """ FILM_NOT_FOUND | ALREADY_IN_WATCHLIST | NOT_IN_WATCHLIST """


def _check_not_in_watchlist(user_id, film_id):
    if WatchlistItem.objects.filter(user_id=user_id, film_id=film_id).exists():
        raise WatchlistError('Film is already in your watchlist', 'ALREADY_IN_WATCHLIST')


def add_to_watchlist(user_id, film_id):
    if not Film.objects.filter(film_id=film_id).exists():
        raise WatchlistError('Film not found', 'FILM_NOT_FOUND')

    _check_not_in_watchlist(user_id, film_id)

    try:
        with transaction.atomic():
            return WatchlistItem.objects.create(user_id=user_id, film_id=film_id)
    except IntegrityError:
        # A concurrent add of the same film got in first
        raise WatchlistError('Film is already in your watchlist', 'ALREADY_IN_WATCHLIST')


def remove_from_watchlist(user_id, film_id):
    deleted, _ = WatchlistItem.objects.filter(user_id=user_id, film_id=film_id).delete()
    if not deleted:
        raise WatchlistError('Film is not in your watchlist', 'NOT_IN_WATCHLIST')


def get_watchlist(user_id):
    """ The user's watchlist, most recently added first, with its size """
    items = WatchlistItem.objects.filter(user_id=user_id).select_related('film').order_by('-added_at')
    return {'items': items, 'count': items.count()}


def is_in_watchlist(user_id, film_id):
    return WatchlistItem.objects.filter(user_id=user_id, film_id=film_id).exists()
