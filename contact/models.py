"""
Contact Models

Database schema for personal contact messages and flood control.
"""
from django.conf import settings
from django.db import models


class ContactMessage(models.Model):
    """
    A contact-form submission from one user to another.

    Stored before the mail is dispatched and never modified afterwards.
    """

    PERSONAL_FORM = 'personal'

    contact_form = models.CharField(
        max_length=32,
        default=PERSONAL_FORM,
        editable=False,
        help_text="Contact form the message was submitted through"
    )

    subject = models.CharField(
        max_length=255,
        help_text="Message subject"
    )

    message = models.TextField(
        help_text="Message body"
    )

    copy = models.BooleanField(
        default=False,
        help_text="Whether the sender asked for a copy"
    )

    recipient = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='received_contact_messages',
        help_text="User the message is addressed to"
    )

    # Sender identity at the time of sending
    name = models.CharField(
        max_length=150,
        help_text="Sender account name"
    )

    mail = models.EmailField(
        max_length=254,
        blank=True,
        help_text="Sender email address"
    )

    created_at = models.DateTimeField(
        auto_now_add=True,
        db_index=True,
        help_text="When the message was submitted"
    )

    class Meta:
        db_table = 'contact_messages'
        ordering = ['-created_at']
        verbose_name = 'Contact Message'
        verbose_name_plural = 'Contact Messages'

    def __str__(self):
        return f"{self.name} -> {self.recipient_id}: {self.subject}"


class ContactFormRateLimit(models.Model):
    """
    Flood-control window for contact submissions, one row per sender.
    """

    identifier = models.CharField(
        max_length=255,
        unique=True,
        help_text="Sender identifier (user id)"
    )

    count = models.IntegerField(
        default=0,
        help_text="Number of submissions in the current window"
    )

    window_start = models.DateTimeField(
        help_text="Start of the rate limit window"
    )

    expires_at = models.DateTimeField(
        db_index=True,
        help_text="End of the rate limit window"
    )

    last_submission = models.DateTimeField(
        auto_now=True,
        help_text="Last submission time"
    )

    class Meta:
        db_table = 'contact_form_rate_limits'
        verbose_name = 'Contact Form Rate Limit'
        verbose_name_plural = 'Contact Form Rate Limits'

    def __str__(self):
        return f"{self.identifier} ({self.count} submissions)"
