"""
Account Services

Lookups the API resources use to resolve users and their preferences.
"""
import logging

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError

from .models import UserData

logger = logging.getLogger(__name__)

User = get_user_model()


class UserStore:
    """Loads user entities by identifier."""

    def load(self, user_id):
        """
        Return the user with the given id, or None.

        Malformed identifiers are treated the same as unknown ones.
        """
        try:
            return User.objects.get(pk=user_id)
        except (User.DoesNotExist, ValidationError, ValueError, TypeError):
            return None


class UserDataStore:
    """Reads and writes UserData preference values."""

    def get(self, module, user_id, name):
        return (
            UserData.objects
            .filter(module=module, user_id=user_id, name=name)
            .values_list('value', flat=True)
            .first()
        )

    def set(self, module, user_id, name, value):
        UserData.objects.update_or_create(
            module=module,
            user_id=user_id,
            name=name,
            defaults={'value': value},
        )
        logger.debug("Stored %s.%s for user %s", module, name, user_id)

    def delete(self, module, user_id, name=None):
        queryset = UserData.objects.filter(module=module, user_id=user_id)
        if name is not None:
            queryset = queryset.filter(name=name)
        queryset.delete()
