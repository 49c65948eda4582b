import logging

from django.db import IntegrityError, transaction

from cineconnect.exceptions import DomainError
from . import metadata
from .models import Film


logger = logging.getLogger(__name__)


class FilmLookupError(DomainError):
    """ FILM_NOT_FOUND | METADATA_UNAVAILABLE """


def get_or_create_film(imdb_id):
    """ Return the local film for imdb_id, mirroring it from the provider when first referenced """
    film = Film.objects.filter(imdb_id=imdb_id).first()
    if film:
        return film

    if not metadata.is_configured():
        raise FilmLookupError('Film not found in database', 'FILM_NOT_FOUND')

    try:
        fields = metadata.fetch_film(imdb_id)
    except metadata.MetadataUnavailable:
        raise FilmLookupError('Film metadata provider is unavailable', 'METADATA_UNAVAILABLE')

    if fields is None:
        raise FilmLookupError('Film not found', 'FILM_NOT_FOUND')

    try:
        with transaction.atomic():
            film = Film.objects.create(imdb_id=imdb_id, **fields)
    except IntegrityError:
        # Another request mirrored the same film first
        return Film.objects.get(imdb_id=imdb_id)

    logger.info("Mirrored film %s (%s) from the metadata provider", film.title, imdb_id)
    return film


def refresh_film(film):
    """ Re-fetch a film's metadata, bypassing the cache; returns True when the row changed """
    fields = metadata.fetch_film(film.imdb_id, use_cache=False)
    if fields is None:
        return False

    changed = [name for name, value in fields.items() if getattr(film, name) != value]
    for name in changed:
        setattr(film, name, fields[name])
    # Saving even without changes bumps updated_at so the film isn't retried tomorrow
    film.save()
    return bool(changed)
