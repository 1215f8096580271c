"""
Flood Control for Contact Submissions

Limits how many personal contact messages one sender can submit within
a window. Limit and window come from the ``contact.settings`` config
object (``flood.limit``, ``flood.interval`` in seconds).
"""
from datetime import timedelta
from functools import wraps

from django.db import transaction
from django.db.models import F
from django.utils import timezone

from .exceptions import ContactFloodLimited
from .models import ContactFormRateLimit

DEFAULT_FLOOD_LIMIT = 5
DEFAULT_FLOOD_INTERVAL = 3600


def format_interval(seconds):
    """Render a window length for error messages, e.g. '1 hour', '90 min'."""
    seconds = int(seconds)
    if seconds >= 3600 and seconds % 3600 == 0:
        hours = seconds // 3600
        return f"{hours} hour{'s' if hours != 1 else ''}"
    if seconds >= 60 and seconds % 60 == 0:
        return f"{seconds // 60} min"
    return f"{seconds} sec"


def get_flood_settings(config_store):
    """Return (limit, interval_seconds) from contact.settings."""
    config = config_store.get('contact.settings')
    limit = config.get('flood.limit', DEFAULT_FLOOD_LIMIT)
    interval = config.get('flood.interval', DEFAULT_FLOOD_INTERVAL)
    return int(limit), int(interval)


def check_rate_limit(identifier, max_count):
    """
    Check if identifier has exceeded rate limit.

    Args:
        identifier: Sender identifier
        max_count: Maximum allowed submissions

    Returns:
        tuple: (is_allowed, retry_after_seconds)
    """
    now = timezone.now()

    rate_limit = ContactFormRateLimit.objects.filter(identifier=identifier).first()
    if rate_limit is None or rate_limit.expires_at <= now:
        return True, 0

    if rate_limit.count >= max_count:
        retry_after = (rate_limit.expires_at - now).total_seconds()
        return False, max(int(retry_after), 1)

    return True, 0


def increment_rate_limit(identifier, window_seconds, max_count=None):
    """
    Count one submission, starting a new window if the last one expired.

    The row is locked while it is read and updated, so concurrent
    submissions from one sender cannot both take the last free slot.
    With ``max_count`` set, a full window is left untouched.

    Returns:
        tuple: (is_counted, retry_after_seconds)
    """
    now = timezone.now()
    with transaction.atomic():
        rate_limit, created = ContactFormRateLimit.objects.select_for_update().get_or_create(
            identifier=identifier,
            defaults={
                'count': 0,
                'window_start': now,
                'expires_at': now + timedelta(seconds=window_seconds),
            }
        )

        if rate_limit.expires_at <= now:
            rate_limit.count = 1
            rate_limit.window_start = now
            rate_limit.expires_at = now + timedelta(seconds=window_seconds)
        elif max_count is not None and rate_limit.count >= max_count:
            retry_after = (rate_limit.expires_at - now).total_seconds()
            return False, max(int(retry_after), 1)
        else:
            rate_limit.count = F('count') + 1
        rate_limit.save()

    return True, 0


def flood_limited(limit, interval, retry_after):
    """Build the 429 error for a sender over the flood limit."""
    return ContactFloodLimited(
        f"You cannot send more than {limit} messages in "
        f"{format_interval(interval)}. Try again later.",
        wait=retry_after,
    )


def flood_control(view_func):
    """
    Decorator rejecting contact submissions over the flood limit.

    Site administrators are exempt. The view registers accepted
    submissions itself through ``increment_rate_limit``, which checks
    the limit again under a row lock.
    """
    @wraps(view_func)
    def wrapped_view(self, request, *args, **kwargs):
        user = request.user
        if not user.is_site_admin:
            limit, interval = get_flood_settings(self.config_store)
            allowed, retry_after = check_rate_limit(str(user.pk), limit)
            if not allowed:
                raise flood_limited(limit, interval, retry_after)

        return view_func(self, request, *args, **kwargs)

    return wrapped_view
