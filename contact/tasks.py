"""
Contact Celery Tasks
"""
import logging

from celery import shared_task
from django.utils import timezone

from .models import ContactFormRateLimit

logger = logging.getLogger(__name__)


@shared_task
def purge_expired_flood_events():
    """
    Delete flood-control rows whose window has ended.

    Scheduled hourly through Celery beat (see core/celery.py).
    """
    deleted, _ = ContactFormRateLimit.objects.filter(expires_at__lte=timezone.now()).delete()
    if deleted:
        logger.info("Purged %d expired contact flood windows", deleted)
    return deleted
