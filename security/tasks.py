import logging

from celery import shared_task
from django.conf import settings

from .models import SuspiciousIP
from .tracking import request_counts, forget_idle_ips


logger = logging.getLogger(__name__)


@shared_task
def detect_anomalies():
    """Celery task flagging IPs whose request volume over the last hour exceeds
    SECURITY_MAX_REQUESTS_PER_HOUR; returns the number of IPs flagged
    """
    threshold = settings.SECURITY_MAX_REQUESTS_PER_HOUR
    counts = request_counts()

    flagged = 0
    for ip, count in counts.items():
        if count <= threshold:
            continue
        SuspiciousIP.objects.update_or_create(
            ip_address=ip,
            defaults={'reason': f"Request volume > {threshold}/hr", 'request_count': count},
        )
        logger.warning("Flagged %s as suspicious: %s requests in the last hour", ip, count)
        flagged += 1

    # IPs without requests in the window no longer need tracking
    forget_idle_ips(counts.keys())
    return flagged
