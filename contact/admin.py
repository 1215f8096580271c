"""
Contact Django Admin Configuration
"""
from django.contrib import admin
from .models import ContactMessage, ContactFormRateLimit


@admin.register(ContactMessage)
class ContactMessageAdmin(admin.ModelAdmin):
    """Read-only view of submitted contact messages."""

    list_display = ['subject', 'name', 'mail', 'recipient', 'copy', 'created_at']
    list_filter = ['copy', 'created_at']
    search_fields = ['subject', 'message', 'name', 'mail', 'recipient__username']
    readonly_fields = [
        'contact_form', 'subject', 'message', 'copy',
        'recipient', 'name', 'mail', 'created_at'
    ]

    def has_add_permission(self, request):
        """Messages only come in through the API."""
        return False

    def has_change_permission(self, request, obj=None):
        return False


@admin.register(ContactFormRateLimit)
class ContactFormRateLimitAdmin(admin.ModelAdmin):
    """Admin interface for flood control windows."""

    list_display = ['identifier', 'count', 'window_start', 'expires_at', 'last_submission']
    search_fields = ['identifier']
    readonly_fields = ['identifier', 'count', 'window_start', 'expires_at', 'last_submission']

    def has_add_permission(self, request):
        """Disable manual creation."""
        return False
