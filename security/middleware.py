import logging
import time

from django.conf import settings
from django.core.cache import cache
from django.http import JsonResponse

from .models import BlockedIP
from .tracking import blocked_key, record_request


logger = logging.getLogger(__name__)

# Blocked IPs are looked up in the database at most once a minute per IP
BLOCKED_CACHE_TIMEOUT = 60


class RequestAuditMiddleware:
    """A middleware that logs each request once it is answered, including:
        - The method, path and response status
        - The duration
        - The user and IP address
        It also denies access to blocked IP addresses and tracks requests per
        IP in the cache for anomaly detection
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        ip = self.get_client_ip(request)

        if self.is_blocked(ip):
            logger.warning("Blocked request from %s to %s", ip, request.path)
            return JsonResponse({'success': False, 'error': 'Your IP has been blocked'}, status=403)

        record_request(ip)

        started = time.monotonic()
        response = self.get_response(request)
        duration_ms = (time.monotonic() - started) * 1000

        # DRF authenticates inside the view and copies the user back onto the request
        user = getattr(request, 'user', None)
        user_label = user.user_id if user is not None and user.is_authenticated else 'anonymous'
        logger.info(
            "%s %s %s %.1fms user=%s ip=%s",
            request.method, request.path, response.status_code, duration_ms, user_label, ip
        )
        return response

    def is_blocked(self, ip):
        key = blocked_key(ip)
        blocked = cache.get(key)
        if blocked is None:
            blocked = BlockedIP.objects.filter(ip_address=ip).exists()
            cache.set(key, blocked, timeout=BLOCKED_CACHE_TIMEOUT)
        return blocked

    def get_client_ip(self, request):
        """ Retrieve the client's IP address from the request """
        # Behind a proxy X-Forwarded-For looks like: "client_ip, proxy1_ip, proxy2_ip"
        x_forwarded_for = request.META.get('HTTP_X_FORWARDED_FOR')

        if x_forwarded_for and settings.USE_X_FORWARDED_FOR:
            return x_forwarded_for.split(',')[0].strip()
        return request.META.get('REMOTE_ADDR')
