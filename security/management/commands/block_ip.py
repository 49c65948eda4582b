from django.core.cache import cache
from django.core.management.base import BaseCommand

from security.models import BlockedIP
from security.tracking import blocked_key


class Command(BaseCommand):
    help = 'Block (or unblock) a specific IP address'

    def add_arguments(self, parser):
        parser.add_argument('ip_address',
                            type=str,
                            help='The IP address to block')
        parser.add_argument('--reason',
                            default='',
                            help='Why the IP is blocked')
        parser.add_argument('--unblock',
                            action='store_true',
                            help='Remove the IP from the block list instead')

    def handle(self, *args, **kwargs):
        ip_address = kwargs['ip_address']
        # The middleware caches its lookups, drop the cached answer for this IP
        cache.delete(blocked_key(ip_address))

        if kwargs['unblock']:
            deleted, _ = BlockedIP.objects.filter(ip_address=ip_address).delete()
            if deleted:
                self.stdout.write(self.style.SUCCESS(f'Successfully unblocked IP address: {ip_address}'))
            else:
                self.stdout.write(self.style.WARNING(f'IP address {ip_address} was not blocked'))
            return

        # If the IP is already blocked, do nothing, else block it by creating a BlockedIP entry
        blocked_ip, created = BlockedIP.objects.get_or_create(
            ip_address=ip_address,
            defaults={'reason': kwargs['reason']}
        )

        if created:
            self.stdout.write(self.style.SUCCESS(f'Successfully blocked IP address: {ip_address}'))
        else:
            self.stdout.write(self.style.WARNING(f'IP address {ip_address} is already blocked'))
