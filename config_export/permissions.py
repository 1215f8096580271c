"""
Configuration Export Permissions
"""
from rest_framework import permissions


class CanExportConfig(permissions.BasePermission):
    """
    Only SUPER_ADMIN users (or Django superusers) may read site configuration.
    """

    def has_permission(self, request, view):
        return bool(
            request.user and
            request.user.is_authenticated and
            request.user.is_site_admin
        )
