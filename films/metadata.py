"""Client for the OMDb film metadata API.

Only single-title lookups by IMDb id are needed: the SPA talks to the
provider directly for search and discovery, the backend mirrors a film into
its own table the first time someone reviews or bookmarks it.
"""
import logging

import requests
from django.conf import settings
from django.core.cache import cache


logger = logging.getLogger(__name__)

# OMDb field name -> Film field name
FIELD_MAP = {
    'Title': 'title',
    'Year': 'year',
    'Poster': 'poster',
    'Plot': 'plot',
    'Director': 'director',
    'Actors': 'actors',
    'Genre': 'genre',
    'Runtime': 'runtime',
    'imdbRating': 'imdb_rating',
}

MAX_LENGTHS = {
    'title': 500,
    'year': 10,
    'director': 500,
    'genre': 500,
    'runtime': 50,
    'imdb_rating': 10,
}


class MetadataUnavailable(Exception):
    """ The provider could not be reached or answered with an error """


def is_configured():
    return bool(settings.OMDB_API_KEY)


def normalize(payload):
    """ Map an OMDb payload onto Film fields, dropping the provider's 'N/A' placeholders """
    fields = {}
    for source, target in FIELD_MAP.items():
        value = payload.get(source) or ''
        if value == 'N/A':
            value = ''
        limit = MAX_LENGTHS.get(target)
        fields[target] = value[:limit] if limit else value
    return fields


def fetch_film(imdb_id, use_cache=True):
    """ Return normalized Film fields for imdb_id, or None when the provider has no match """
    cache_key = f"omdb_film_{imdb_id}"
    if use_cache:
        cached = cache.get(cache_key)
        if cached is not None:
            return cached

    try:
        response = requests.get(
            settings.OMDB_BASE_URL,
            params={
                'apikey': settings.OMDB_API_KEY,
                'i': imdb_id,
                'plot': 'full',
            },
            timeout=settings.OMDB_TIMEOUT
        )
        response.raise_for_status()
        payload = response.json()
    except (requests.exceptions.RequestException, ValueError) as exc:
        logger.warning("OMDb lookup for %s failed: %s", imdb_id, exc)
        raise MetadataUnavailable(str(exc)) from exc

    # OMDb answers 200 with Response="False" for unknown ids
    if payload.get('Response') == 'False':
        logger.info("OMDb has no film %s: %s", imdb_id, payload.get('Error'))
        return None

    fields = normalize(payload)
    cache.set(cache_key, fields, timeout=settings.METADATA_CACHE_TIMEOUT)
    return fields
