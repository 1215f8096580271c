"""
Tests for personal contact submissions.
"""
import logging
import uuid
from datetime import timedelta
from smtplib import SMTPException
from unittest.mock import patch

import pytest
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APIRequestFactory, force_authenticate

from accounts.services import UserDataStore
from contact.mail_handler import ContactMailHandler
from contact.models import ContactMessage, ContactFormRateLimit
from contact.rate_limiting import check_rate_limit, format_interval, increment_rate_limit
from contact.tasks import purge_expired_flood_events
from contact.views import ContactUserView


pytestmark = pytest.mark.django_db

URL = '/api/contact-user'


@pytest.fixture
def authed_client(api_client, sender):
    api_client.force_authenticate(user=sender)
    return api_client


@pytest.fixture
def payload(recipient):
    return {
        'recipient': str(recipient.pk),
        'subject': 'Hello there',
        'message': 'I would like to talk about your article.',
    }


class TestContactSubmission:
    """Test successful submissions."""

    def test_valid_submission(self, authed_client, payload, recipient, sender, mailoutbox):
        response = authed_client.post(URL, payload, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {'message': 'Contact form has been submitted successfully.'}

        assert ContactMessage.objects.count() == 1
        message = ContactMessage.objects.get()
        assert message.contact_form == 'personal'
        assert message.subject == 'Hello there'
        assert message.message == 'I would like to talk about your article.'
        assert message.recipient == recipient
        assert message.name == 'sender'
        assert message.mail == 'sender@test.com'
        assert message.copy is False

        assert len(mailoutbox) == 1
        assert mailoutbox[0].to == ['recipient@test.com']

    @pytest.mark.parametrize('copy_value, expected', [
        (True, True),
        (1, True),
        ('yes', True),
        (False, False),
        (0, False),
        ('0', False),
        ('', False),
        (None, False),
    ])
    def test_copy_flag_coercion(self, authed_client, payload, copy_value, expected):
        payload['copy'] = copy_value

        response = authed_client.post(URL, payload, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert ContactMessage.objects.get().copy is expected

    def test_copy_sends_mail_to_sender(self, authed_client, payload, mailoutbox):
        payload['copy'] = True

        authed_client.post(URL, payload, format='json')

        assert [mail.to for mail in mailoutbox] == [['recipient@test.com'], ['sender@test.com']]

    def test_multiline_subject_is_delivered(self, authed_client, payload, mailoutbox):
        payload['subject'] = 'Hello\r\nthere\nBcc: someone@example.com'

        response = authed_client.post(URL, payload, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert len(mailoutbox) == 1
        assert mailoutbox[0].subject.endswith('] Hello there Bcc: someone@example.com')
        assert mailoutbox[0].bcc == []
        assert ContactMessage.objects.get().subject == 'Hello\r\nthere\nBcc: someone@example.com'


class TestContactValidation:
    """Test rejected submissions; none of them may store a message."""

    @pytest.mark.parametrize('missing', ['recipient', 'subject', 'message'])
    def test_missing_field(self, authed_client, payload, missing):
        del payload[missing]

        response = authed_client.post(URL, payload, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {'message': 'Missing recipient, subject, or message.'}
        assert ContactMessage.objects.count() == 0

    @pytest.mark.parametrize('empty_value', ['', '0', None, 0])
    def test_empty_subject(self, authed_client, payload, empty_value):
        payload['subject'] = empty_value

        response = authed_client.post(URL, payload, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert ContactMessage.objects.count() == 0

    def test_subject_too_long(self, authed_client, payload, mailoutbox):
        payload['subject'] = 'x' * 300

        response = authed_client.post(URL, payload, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {'message': 'Subject cannot be longer than 255 characters.'}
        assert ContactMessage.objects.count() == 0
        assert len(mailoutbox) == 0

    def test_subject_at_max_length(self, authed_client, payload):
        payload['subject'] = 'x' * 255

        response = authed_client.post(URL, payload, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert len(ContactMessage.objects.get().subject) == 255

    def test_empty_body(self, authed_client):
        response = authed_client.post(URL, content_type='application/json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {'message': 'Missing recipient, subject, or message.'}

    def test_non_object_body(self, authed_client):
        response = authed_client.post(URL, ['recipient', 'subject'], format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert ContactMessage.objects.count() == 0

    def test_malformed_json(self, authed_client):
        response = authed_client.generic('POST', URL, '{"recipient": ', content_type='application/json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert ContactMessage.objects.count() == 0

    @pytest.mark.parametrize('recipient_id', [str(uuid.uuid4()), 'not-a-uuid', 12345])
    def test_unknown_recipient(self, authed_client, payload, recipient_id):
        payload['recipient'] = recipient_id

        response = authed_client.post(URL, payload, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {'message': 'Please provide a valid user ID for the recipient.'}
        assert ContactMessage.objects.count() == 0

    @pytest.mark.parametrize('stored_value', ['0', 0, False, '', 'yes'])
    def test_recipient_disabled_contact(self, authed_client, payload, recipient, stored_value):
        UserDataStore().set('contact', recipient.pk, 'enabled', stored_value)

        response = authed_client.post(URL, payload, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {
            'message': 'The recipient has disabled contact. Please contact the administrator.'
        }
        assert ContactMessage.objects.count() == 0

    def test_recipient_without_preference(self, authed_client, payload, recipient):
        UserDataStore().delete('contact', recipient.pk)

        response = authed_client.post(URL, payload, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert ContactMessage.objects.count() == 0

    @pytest.mark.parametrize('stored_value', ['1', 1, True])
    def test_enabled_markers(self, authed_client, payload, recipient, stored_value):
        UserDataStore().set('contact', recipient.pk, 'enabled', stored_value)

        response = authed_client.post(URL, payload, format='json')

        assert response.status_code == status.HTTP_200_OK

    def test_anonymous_rejected(self, api_client, payload):
        response = api_client.post(URL, payload, format='json')

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert ContactMessage.objects.count() == 0


class TestMailFailure:
    """Test delivery failures after the message is stored."""

    def test_mail_failure_keeps_message(self, authed_client, payload, recipient, caplog):
        with patch.object(
            ContactMailHandler, 'send_mail_messages',
            side_effect=SMTPException('Connection refused by mail server')
        ):
            with caplog.at_level(logging.ERROR, logger='contact.views'):
                response = authed_client.post(URL, payload, format='json')

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.json() == {'message': 'Connection refused by mail server'}
        assert ContactMessage.objects.count() == 1

        errors = [r for r in caplog.records if r.name == 'contact.views' and r.levelno == logging.ERROR]
        assert len(errors) == 1
        assert errors[0].getMessage() == f'Failed to send email to "{recipient.pk}".'

    def test_transport_error_propagates_from_handler(self, authed_client, payload):
        with patch('django.core.mail.backends.locmem.EmailBackend.send_messages',
                   side_effect=OSError('Network unreachable')):
            response = authed_client.post(URL, payload, format='json')

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.json() == {'message': 'Network unreachable'}
        assert ContactMessage.objects.count() == 1

    def test_injected_mail_handler(self, sender, payload):
        class FailingMailHandler:
            def __init__(self):
                self.calls = []

            def send_mail_messages(self, message, sender):
                self.calls.append((message, sender))
                raise RuntimeError('Mailbox full')

        handler = FailingMailHandler()
        view = ContactUserView.as_view(mail_handler=handler)
        request = APIRequestFactory().post(URL, payload, format='json')
        force_authenticate(request, user=sender)

        response = view(request)

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.data == {'message': 'Mailbox full'}
        assert len(handler.calls) == 1
        message, mail_sender = handler.calls[0]
        assert message.pk is not None
        assert mail_sender == sender


    def test_mail_failure_keeps_cause(self, sender, payload):
        raised = []

        class RecordingView(ContactUserView):
            def handle_exception(self, exc):
                raised.append(exc)
                return super().handle_exception(exc)

        class FailingMailHandler:
            def send_mail_messages(self, message, sender):
                raise SMTPException('Relay denied')

        view = RecordingView.as_view(mail_handler=FailingMailHandler())
        request = APIRequestFactory().post(URL, payload, format='json')
        force_authenticate(request, user=sender)

        response = view(request)

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert len(raised) == 1
        assert isinstance(raised[0].__cause__, SMTPException)


class TestMailHandler:
    """Test the mails built for a contact message."""

    def test_recipient_mail(self, config_store, sender, recipient, mailoutbox):
        config_store.set('system.site', {'name': 'Example Site', 'mail': 'site@example.com'})
        message = ContactMessage.objects.create(
            subject='Question', message='How are you?', recipient=recipient,
            name=sender.username, mail=sender.email,
        )

        ContactMailHandler(config_store).send_mail_messages(message, sender)

        assert len(mailoutbox) == 1
        mail = mailoutbox[0]
        assert mail.subject == '[Example Site] Question'
        assert mail.from_email == 'site@example.com'
        assert mail.reply_to == ['sender@test.com']
        assert 'Hello recipient,' in mail.body
        assert 'sender (' in mail.body
        assert 'How are you?' in mail.body

    def test_falls_back_to_settings(self, config_store, sender, recipient, mailoutbox, settings):
        settings.SITE_NAME = 'Fallback Site'
        settings.CONTACT_EMAIL_FROM = 'fallback@example.com'
        message = ContactMessage.objects.create(
            subject='Question', message='Body', recipient=recipient,
            name=sender.username, mail=sender.email, copy=True,
        )

        ContactMailHandler(config_store).send_mail_messages(message, sender)

        assert len(mailoutbox) == 2
        assert mailoutbox[0].subject == '[Fallback Site] Question'
        assert mailoutbox[1].to == ['sender@test.com']
        assert all(mail.from_email == 'fallback@example.com' for mail in mailoutbox)


class TestFloodControl:
    """Test per-sender flood control."""

    @pytest.fixture(autouse=True)
    def tight_limit(self, config_store):
        config_store.set('contact.settings', {
            'flood': {'limit': 2, 'interval': 3600},
            'user_default_enabled': True,
        })

    def test_limit_exceeded(self, authed_client, payload, mailoutbox):
        for _ in range(2):
            response = authed_client.post(URL, payload, format='json')
            assert response.status_code == status.HTTP_200_OK

        response = authed_client.post(URL, payload, format='json')

        assert response.status_code == status.HTTP_429_TOO_MANY_REQUESTS
        assert response.json() == {
            'message': 'You cannot send more than 2 messages in 1 hour. Try again later.'
        }
        assert 'Retry-After' in response
        assert ContactMessage.objects.count() == 2

    def test_rejected_submissions_do_not_count(self, authed_client, payload):
        bad = dict(payload, subject='')
        for _ in range(3):
            authed_client.post(URL, bad, format='json')

        response = authed_client.post(URL, payload, format='json')

        assert response.status_code == status.HTTP_200_OK

    def test_mail_failures_count(self, authed_client, payload):
        with patch.object(ContactMailHandler, 'send_mail_messages', side_effect=SMTPException('down')):
            for _ in range(2):
                authed_client.post(URL, payload, format='json')

        response = authed_client.post(URL, payload, format='json')

        assert response.status_code == status.HTTP_429_TOO_MANY_REQUESTS

    def test_limit_rechecked_when_storing(self, authed_client, payload, mailoutbox):
        for _ in range(2):
            authed_client.post(URL, payload, format='json')

        # A concurrent request may pass the early check before the others are counted
        with patch('contact.rate_limiting.check_rate_limit', return_value=(True, 0)):
            response = authed_client.post(URL, payload, format='json')

        assert response.status_code == status.HTTP_429_TOO_MANY_REQUESTS
        assert response.json() == {
            'message': 'You cannot send more than 2 messages in 1 hour. Try again later.'
        }
        assert 'Retry-After' in response
        assert ContactMessage.objects.count() == 2
        assert len(mailoutbox) == 2

    def test_increment_refuses_full_window(self, sender):
        identifier = str(sender.pk)

        assert increment_rate_limit(identifier, 3600, 2) == (True, 0)
        assert increment_rate_limit(identifier, 3600, 2) == (True, 0)
        counted, retry_after = increment_rate_limit(identifier, 3600, 2)

        assert counted is False
        assert 0 < retry_after <= 3600
        assert ContactFormRateLimit.objects.get(identifier=identifier).count == 2

    def test_site_admin_exempt(self, api_client, super_admin, payload):
        api_client.force_authenticate(user=super_admin)
        for _ in range(3):
            response = api_client.post(URL, payload, format='json')
            assert response.status_code == status.HTTP_200_OK

    def test_expired_window_resets(self, sender):
        identifier = str(sender.pk)
        increment_rate_limit(identifier, 3600)
        increment_rate_limit(identifier, 3600)
        assert check_rate_limit(identifier, 2)[0] is False

        ContactFormRateLimit.objects.filter(identifier=identifier).update(
            expires_at=timezone.now() - timedelta(seconds=1)
        )

        assert check_rate_limit(identifier, 2) == (True, 0)
        increment_rate_limit(identifier, 3600)
        assert ContactFormRateLimit.objects.get(identifier=identifier).count == 1

    def test_format_interval(self):
        assert format_interval(3600) == '1 hour'
        assert format_interval(7200) == '2 hours'
        assert format_interval(900) == '15 min'
        assert format_interval(45) == '45 sec'


class TestPurgeTask:
    """Test the flood cleanup task."""

    def test_purges_only_expired_rows(self):
        now = timezone.now()
        ContactFormRateLimit.objects.create(
            identifier='expired', count=3,
            window_start=now - timedelta(hours=2), expires_at=now - timedelta(hours=1),
        )
        ContactFormRateLimit.objects.create(
            identifier='active', count=1,
            window_start=now, expires_at=now + timedelta(hours=1),
        )

        deleted = purge_expired_flood_events()

        assert deleted == 1
        assert list(ContactFormRateLimit.objects.values_list('identifier', flat=True)) == ['active']


class TestDefaultPreference:
    """Test the contact preference written for new users."""

    def test_new_user_enabled_by_default(self, recipient):
        assert UserDataStore().get('contact', recipient.pk, 'enabled') == '1'

    def test_site_default_disabled(self, config_store, django_user_model):
        config_store.set('contact.settings', {'user_default_enabled': False})

        user = django_user_model.objects.create_user(username='quiet', email='quiet@test.com', password='x')

        assert UserDataStore().get('contact', user.pk, 'enabled') == '0'

    def test_existing_user_save_keeps_preference(self, recipient):
        UserDataStore().set('contact', recipient.pk, 'enabled', '0')

        recipient.first_name = 'Changed'
        recipient.save()

        assert UserDataStore().get('contact', recipient.pk, 'enabled') == '0'
