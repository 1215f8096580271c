"""
Celery configuration for the Contact Form API.

Background work kept out of the request path:
- Flood-control table cleanup
"""
import os
from celery import Celery
from celery.schedules import crontab

# Set the default Django settings module
os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'core.settings')

app = Celery('core')

# Load config from Django settings with CELERY_ prefix
app.config_from_object('django.conf:settings', namespace='CELERY')

# Auto-discover tasks in all installed apps
app.autodiscover_tasks()


# =============================================================================
# CELERY BEAT SCHEDULE - Periodic Tasks
# =============================================================================
app.conf.beat_schedule = {
    # Expired contact flood windows (run hourly)
    'purge-contact-flood-events': {
        'task': 'contact.tasks.purge_expired_flood_events',
        'schedule': crontab(minute=15),
    },
}

app.conf.update(
    result_expires=3600,  # 1 hour

    task_time_limit=300,  # 5 minutes hard limit
    task_soft_time_limit=240,  # 4 minutes soft limit

    task_acks_late=True,
    task_reject_on_worker_lost=True,
    worker_prefetch_multiplier=1,

    task_serializer='json',
    result_serializer='json',
    accept_content=['json'],

    enable_utc=True,
)
