"""
Configuration Django Admin
"""
from django.contrib import admin
from .models import ConfigObject


@admin.register(ConfigObject)
class ConfigObjectAdmin(admin.ModelAdmin):
    """Admin interface for configuration objects."""

    list_display = ['name', 'updated_at']
    search_fields = ['name']
    readonly_fields = ['created_at', 'updated_at']
