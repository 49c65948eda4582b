import time
from io import StringIO

from django.core.cache import cache
from django.core.management import call_command
from django.test import TestCase, override_settings

from security.models import BlockedIP, SuspiciousIP
from security.tasks import detect_anomalies
from security.tracking import TRACKED_IPS_KEY, record_request, request_counts


class RequestAuditMiddlewareTest(TestCase):
    def setUp(self):
        cache.clear()

    def test_blocked_ip_is_refused(self):
        BlockedIP.objects.create(ip_address="10.0.0.66", reason="scraper")

        response = self.client.get("/health", REMOTE_ADDR="10.0.0.66")

        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.json(), {"success": False, "error": "Your IP has been blocked"})

    @override_settings(USE_X_FORWARDED_FOR=True)
    def test_forwarded_for_is_used_behind_a_proxy(self):
        BlockedIP.objects.create(ip_address="203.0.113.7")

        response = self.client.get("/health", HTTP_X_FORWARDED_FOR="203.0.113.7, 10.0.0.1")
        self.assertEqual(response.status_code, 403)

    def test_forwarded_for_is_ignored_without_a_proxy(self):
        BlockedIP.objects.create(ip_address="10.0.0.66")

        # A blocked client cannot get through by claiming another address
        response = self.client.get("/health", REMOTE_ADDR="10.0.0.66", HTTP_X_FORWARDED_FOR="198.51.100.1")
        self.assertEqual(response.status_code, 403)

        response = self.client.get("/health", REMOTE_ADDR="10.0.0.5", HTTP_X_FORWARDED_FOR="10.0.0.66")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(request_counts()["10.0.0.5"], 1)
        self.assertNotIn("198.51.100.1", request_counts())

    def test_requests_are_tracked_and_logged(self):
        with self.assertLogs("security.middleware", level="INFO") as logs:
            response = self.client.get("/health", REMOTE_ADDR="10.0.0.5")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(request_counts()["10.0.0.5"], 1)
        self.assertIn("GET /health 200", logs.output[0])
        self.assertIn("ip=10.0.0.5", logs.output[0])


@override_settings(SECURITY_MAX_REQUESTS_PER_HOUR=3)
class DetectAnomaliesTest(TestCase):
    def setUp(self):
        cache.clear()

    def test_flags_high_volume_ips(self):
        for _ in range(5):
            record_request("10.0.0.9")
        record_request("10.0.0.10")

        flagged = detect_anomalies()

        self.assertEqual(flagged, 1)
        suspicious = SuspiciousIP.objects.get()
        self.assertEqual(suspicious.ip_address, "10.0.0.9")
        self.assertEqual(suspicious.request_count, 5)

    def test_runs_twice_without_duplicates(self):
        for _ in range(4):
            record_request("10.0.0.9")
        detect_anomalies()
        record_request("10.0.0.9")
        detect_anomalies()

        self.assertEqual(SuspiciousIP.objects.get().request_count, 5)

    def test_old_requests_fall_out_of_the_window(self):
        two_hours_ago = time.time() - 2 * 60 * 60
        for _ in range(5):
            record_request("10.0.0.9", now=two_hours_ago)

        self.assertEqual(detect_anomalies(), 0)
        self.assertEqual(cache.get(TRACKED_IPS_KEY), [])


class BlockIPCommandTest(TestCase):
    def setUp(self):
        cache.clear()

    def test_block_and_unblock(self):
        out = StringIO()
        call_command("block_ip", "10.0.0.66", "--reason", "scraper", stdout=out)
        self.assertIn("Successfully blocked", out.getvalue())
        self.assertEqual(BlockedIP.objects.get().reason, "scraper")

        call_command("block_ip", "10.0.0.66", stdout=out)
        self.assertIn("already blocked", out.getvalue())

        call_command("block_ip", "10.0.0.66", "--unblock", stdout=out)
        self.assertFalse(BlockedIP.objects.exists())

    def test_block_takes_effect_immediately(self):
        self.assertEqual(self.client.get("/health", REMOTE_ADDR="10.0.0.66").status_code, 200)

        call_command("block_ip", "10.0.0.66", stdout=StringIO())

        self.assertEqual(self.client.get("/health", REMOTE_ADDR="10.0.0.66").status_code, 403)
