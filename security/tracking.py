"""Per-IP request timestamps kept in the cache for the anomaly detection task.

The cache API has no key listing, so the IPs seen during the window are
kept in their own list next to the per-IP keys.
"""
import time

from django.core.cache import cache


WINDOW_SECONDS = 60 * 60
TRACKED_IPS_KEY = 'requests:tracked_ips'


def requests_key(ip):
    return f"requests:{ip}"


def blocked_key(ip):
    return f"blocked_ip:{ip}"


def record_request(ip, now=None):
    """ Store the request time for ip, keeping only the last hour """
    now = now or time.time()
    key = requests_key(ip)

    timestamps = [ts for ts in cache.get(key, []) if ts > now - WINDOW_SECONDS]
    timestamps.append(now)
    cache.set(key, timestamps, timeout=WINDOW_SECONDS)

    tracked = cache.get(TRACKED_IPS_KEY, [])
    if ip not in tracked:
        tracked.append(ip)
        cache.set(TRACKED_IPS_KEY, tracked, timeout=WINDOW_SECONDS)


def request_counts(now=None):
    """ {ip: requests in the last hour} for every tracked IP """
    now = now or time.time()
    counts = {}
    for ip in cache.get(TRACKED_IPS_KEY, []):
        timestamps = [ts for ts in cache.get(requests_key(ip), []) if ts > now - WINDOW_SECONDS]
        if timestamps:
            counts[ip] = len(timestamps)
    return counts


def forget_idle_ips(active_ips):
    cache.set(TRACKED_IPS_KEY, list(active_ips), timeout=WINDOW_SECONDS)
