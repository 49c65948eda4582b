import logging

from django.db import connection, DatabaseError
from django.http import JsonResponse
from django.utils import timezone


logger = logging.getLogger(__name__)


def health(request):
    """ Liveness probe, also checks the database answers """
    database = 'ok'
    try:
        with connection.cursor() as cursor:
            cursor.execute('SELECT 1')
    except DatabaseError:
        logger.exception("Health check could not reach the database")
        database = 'unavailable'

    status_code = 200 if database == 'ok' else 503
    return JsonResponse(
        {
            'status': 'ok' if status_code == 200 else 'degraded',
            'database': database,
            'timestamp': timezone.now().isoformat(),
        },
        status=status_code
    )
