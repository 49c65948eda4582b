import logging
from datetime import timedelta

from celery import shared_task
from django.conf import settings
from django.utils import timezone

from . import metadata
from .models import Film
from .services import refresh_film


logger = logging.getLogger(__name__)

# Upper bound of provider calls per run, OMDb free keys allow 1000 a day
MAX_FILMS_PER_RUN = 200


@shared_task
def refresh_stale_films():
    """ Celery task re-syncing the metadata of films not refreshed for a while

        Films are refreshed oldest first; a provider outage stops the run early
        so the remaining films are picked up by the next one
    """
    if not metadata.is_configured():
        return 0

    cutoff = timezone.now() - timedelta(days=settings.FILM_METADATA_MAX_AGE_DAYS)
    stale = Film.objects.filter(updated_at__lt=cutoff).order_by('updated_at')[:MAX_FILMS_PER_RUN]

    refreshed = 0
    for film in stale:
        try:
            if refresh_film(film):
                refreshed += 1
        except metadata.MetadataUnavailable:
            logger.warning("Metadata provider unavailable, stopping refresh after %s films", refreshed)
            break

    return refreshed
