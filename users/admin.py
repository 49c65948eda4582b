from django.contrib import admin
from django.contrib.auth.admin import UserAdmin

from .models import User


@admin.register(User)
class CineConnectUserAdmin(UserAdmin):
    ordering = ['-created_at']
    list_display = ['username', 'email', 'is_staff', 'created_at']
    search_fields = ['username', 'email']
    fieldsets = UserAdmin.fieldsets + (
        ('Profile', {'fields': ('avatar_url',)}),
    )
