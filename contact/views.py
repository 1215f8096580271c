"""
Contact Views

API endpoint for personal (user-to-user) contact messages.
"""
import logging

from django.db import transaction
from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from rest_framework.parsers import JSONParser
from rest_framework import status

from accounts.services import UserStore, UserDataStore
from config_export.services import ConfigStore
from core.utils import is_empty
from .exceptions import ContactBadRequest, ContactMailFailure
from .mail_handler import ContactMailHandler
from .models import ContactMessage
from .rate_limiting import flood_control, flood_limited, get_flood_settings, increment_rate_limit

logger = logging.getLogger(__name__)

CONTACT_ENABLED_MARKERS = ('1', 1)
SUBJECT_MAX_LENGTH = ContactMessage._meta.get_field('subject').max_length


class ContactUserView(APIView):
    """
    Submit a personal contact message to another user.

    POST /api/contact-user
    {"recipient": "<user id>", "subject": "...", "message": "...", "copy": false}

    The message is stored before it is mailed and is kept even when
    delivery fails.
    """

    permission_classes = [IsAuthenticated]
    parser_classes = [JSONParser]

    user_store = None
    user_data = None
    mail_handler = None
    config_store = None

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        if self.config_store is None:
            self.config_store = ConfigStore()
        if self.user_store is None:
            self.user_store = UserStore()
        if self.user_data is None:
            self.user_data = UserDataStore()
        if self.mail_handler is None:
            self.mail_handler = ContactMailHandler(self.config_store)

    @flood_control
    def post(self, request):
        data = request.data if isinstance(request.data, dict) else {}

        if is_empty(data.get('recipient')) or is_empty(data.get('subject')) or is_empty(data.get('message')):
            raise ContactBadRequest('Missing recipient, subject, or message.')

        recipient = self.user_store.load(data['recipient'])
        if recipient is None:
            raise ContactBadRequest('Please provide a valid user ID for the recipient.')

        # Only an explicit opt-in counts; a missing preference means disabled
        contact_enabled = self.user_data.get('contact', recipient.pk, 'enabled')
        if contact_enabled not in CONTACT_ENABLED_MARKERS:
            raise ContactBadRequest('The recipient has disabled contact. Please contact the administrator.')

        subject = str(data['subject'])
        if len(subject) > SUBJECT_MAX_LENGTH:
            raise ContactBadRequest(f'Subject cannot be longer than {SUBJECT_MAX_LENGTH} characters.')

        sender = request.user
        limit, interval = get_flood_settings(self.config_store)
        with transaction.atomic():
            message = ContactMessage.objects.create(
                contact_form=ContactMessage.PERSONAL_FORM,
                subject=subject,
                message=data['message'],
                copy=not is_empty(data.get('copy')),
                recipient=recipient,
                name=sender.get_username(),
                mail=sender.email,
            )

            max_count = None if sender.is_site_admin else limit
            counted, retry_after = increment_rate_limit(str(sender.pk), interval, max_count)
            if not counted:
                raise flood_limited(limit, interval, retry_after)

        try:
            self.mail_handler.send_mail_messages(message, sender)
        except Exception as exc:
            logger.error('Failed to send email to "%s".', data['recipient'])
            raise ContactMailFailure(str(exc)) from exc

        return Response(
            {'message': 'Contact form has been submitted successfully.'},
            status=status.HTTP_200_OK
        )
