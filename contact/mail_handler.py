"""
Contact Mail Handler

Sends a stored personal contact message to its recipient, plus a copy to
the sender when requested. Transport errors are not caught here; the
caller decides how to report them.
"""
import logging

from django.conf import settings
from django.core.mail import EmailMessage

from config_export.services import ConfigStore

logger = logging.getLogger(__name__)


class ContactMailHandler:
    """Builds and sends the mails for a ContactMessage."""

    def __init__(self, config_store=None):
        self.config_store = config_store or ConfigStore()

    def send_mail_messages(self, message, sender):
        """
        Send ``message`` to its recipient, and to ``sender`` when ``message.copy``.

        Args:
            message: Saved ContactMessage
            sender: User submitting the message
        """
        site = self.config_store.get('system.site')
        site_name = site.get('name') or settings.SITE_NAME
        site_mail = site.get('mail') or settings.CONTACT_EMAIL_FROM

        recipient = message.recipient
        # Header values can't carry line breaks
        subject = ' '.join(f"[{site_name}] {message.subject}".splitlines())
        body = self._build_body(message, sender, recipient, site_name)

        EmailMessage(
            subject=subject,
            body=body,
            from_email=site_mail,
            to=[recipient.email],
            reply_to=[message.mail] if message.mail else None,
        ).send(fail_silently=False)

        if message.copy:
            EmailMessage(
                subject=subject,
                body=body,
                from_email=site_mail,
                to=[message.mail],
            ).send(fail_silently=False)

        logger.info(
            "%s (%s) sent %s an email.",
            message.name, message.mail, recipient.get_username()
        )

    def _build_body(self, message, sender, recipient, site_name):
        frontend_url = settings.FRONTEND_URL.rstrip('/')
        sender_url = f"{frontend_url}/users/{sender.pk}"
        settings_url = f"{frontend_url}/users/{recipient.pk}/edit"

        return f"""Hello {recipient.get_username()},

{message.name} ({sender_url}) has sent you a message via your contact form at {site_name}.

If you don't want to receive such emails, you can change your settings at {settings_url}.

Message:

{message.message}
"""
