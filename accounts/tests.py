"""
Tests for account lookups and user preference storage.
"""
import uuid

import pytest

from accounts.models import UserData
from accounts.services import UserStore, UserDataStore


pytestmark = pytest.mark.django_db


class TestUserStore:

    def test_load_existing_user(self, recipient):
        assert UserStore().load(recipient.pk) == recipient
        assert UserStore().load(str(recipient.pk)) == recipient

    @pytest.mark.parametrize('user_id', [uuid.uuid4(), 'garbage', None, 42, {'id': 1}])
    def test_load_unknown_returns_none(self, user_id):
        assert UserStore().load(user_id) is None


class TestUserDataStore:

    def test_get_missing_returns_none(self, recipient):
        assert UserDataStore().get('contact', recipient.pk, 'missing') is None

    def test_set_and_get(self, recipient):
        store = UserDataStore()
        store.set('profile', recipient.pk, 'timezone', 'Europe/Paris')

        assert store.get('profile', recipient.pk, 'timezone') == 'Europe/Paris'

    def test_set_updates_in_place(self, recipient):
        store = UserDataStore()
        store.set('contact', recipient.pk, 'enabled', '0')
        store.set('contact', recipient.pk, 'enabled', '1')

        assert UserData.objects.filter(user=recipient, module='contact', name='enabled').count() == 1
        assert store.get('contact', recipient.pk, 'enabled') == '1'

    def test_delete_module(self, recipient):
        store = UserDataStore()
        store.set('profile', recipient.pk, 'a', 1)
        store.set('profile', recipient.pk, 'b', 2)

        store.delete('profile', recipient.pk)

        assert store.get('profile', recipient.pk, 'a') is None
        assert store.get('profile', recipient.pk, 'b') is None
        assert store.get('contact', recipient.pk, 'enabled') == '1'

    def test_deleting_user_removes_data(self, recipient):
        user_id = recipient.pk
        recipient.delete()

        assert not UserData.objects.filter(user_id=user_id).exists()


class TestUserModel:

    def test_site_admin_roles(self, super_admin, sender):
        assert super_admin.is_site_admin is True
        assert sender.is_site_admin is False

    def test_full_name_falls_back_to_username(self, django_user_model):
        user = django_user_model.objects.create_user(username='plain', password='x')

        assert user.get_full_name() == 'plain'
