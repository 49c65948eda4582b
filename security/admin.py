from django.contrib import admin

from .models import BlockedIP, SuspiciousIP


@admin.register(BlockedIP)
class BlockedIPAdmin(admin.ModelAdmin):
    list_display = ['ip_address', 'reason', 'blocked_at']
    search_fields = ['ip_address']


@admin.register(SuspiciousIP)
class SuspiciousIPAdmin(admin.ModelAdmin):
    list_display = ['ip_address', 'reason', 'request_count', 'first_seen', 'last_seen']
    search_fields = ['ip_address']
