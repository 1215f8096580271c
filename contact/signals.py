"""
Contact Signals

Gives every new user a contact preference, using the site default from
the contact.settings config object.
"""
import logging

from django.conf import settings
from django.db.models.signals import post_save
from django.dispatch import receiver

from accounts.services import UserDataStore
from config_export.services import ConfigStore

logger = logging.getLogger(__name__)


@receiver(post_save, sender=settings.AUTH_USER_MODEL)
def set_default_contact_preference(sender, instance, created, **kwargs):
    if not created:
        return

    default_enabled = ConfigStore().get('contact.settings').get('user_default_enabled', True)
    UserDataStore().set('contact', instance.pk, 'enabled', '1' if default_enabled else '0')
    logger.debug("Contact for user %s %s by default", instance.pk, 'enabled' if default_enabled else 'disabled')
