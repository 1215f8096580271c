"""
Tests for the configuration store and the config export endpoint.
"""
import pytest
from django.core.management import call_command
from rest_framework import status
from rest_framework.test import APIRequestFactory, force_authenticate

from config_export.models import ConfigObject
from config_export.services import Config, ConfigStore
from config_export.views import ConfigExportView


pytestmark = pytest.mark.django_db


@pytest.fixture
def site_config(config_store):
    return config_store.set('system.site', {
        'name': 'Example Site',
        'mail': 'site@example.com',
        'page': {'front': '/node', '403': ''},
    })


class TestConfigStore:
    """Test the database-backed config store."""

    def test_missing_config_is_new(self, config_store):
        config = config_store.get('system.nothing')

        assert config.is_new() is True
        assert config.get() == {}

    def test_stored_config_is_not_new(self, config_store, site_config):
        config = config_store.get('system.site')

        assert config.is_new() is False
        assert config.get('name') == 'Example Site'

    def test_dotted_key_lookup(self, site_config):
        assert site_config.get('page.front') == '/node'
        assert site_config.get('page.missing') is None
        assert site_config.get('name.nested', default='x') == 'x'

    def test_get_returns_a_copy(self, config_store, site_config):
        data = config_store.get('system.site').get()
        data['page']['front'] = '/changed'

        assert config_store.get('system.site').get('page.front') == '/node'

    def test_set_overwrites(self, config_store, site_config):
        config_store.set('system.site', {'name': 'Renamed'})

        assert ConfigObject.objects.count() == 1
        assert config_store.get('system.site').get() == {'name': 'Renamed'}

    def test_delete(self, config_store, site_config):
        config_store.delete('system.site')

        assert config_store.get('system.site').is_new() is True


class TestConfigExportView:
    """Test GET /api/config-export/<config_name>."""

    def test_existing_config_returns_full_contents(self, api_client, super_admin, site_config):
        api_client.force_authenticate(user=super_admin)
        response = api_client.get('/api/config-export/system.site')

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {
            'name': 'Example Site',
            'mail': 'site@example.com',
            'page': {'front': '/node', '403': ''},
        }

    def test_unknown_config_returns_404(self, api_client, super_admin):
        api_client.force_authenticate(user=super_admin)
        response = api_client.get('/api/config-export/does.not.exist')

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json() == {'error': "Configuration 'does.not.exist' does not exist."}

    def test_missing_name_returns_400(self, api_client, super_admin):
        api_client.force_authenticate(user=super_admin)
        response = api_client.get('/api/config-export/')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {'error': 'Config name parameter is missing.'}

    def test_zero_name_counts_as_missing(self, api_client, super_admin):
        api_client.force_authenticate(user=super_admin)
        response = api_client.get('/api/config-export/0')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_stored_empty_config_still_exists(self, api_client, super_admin, config_store):
        config_store.set('empty.config', {})
        api_client.force_authenticate(user=super_admin)
        response = api_client.get('/api/config-export/empty.config')

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {}

    def test_unauthenticated_access_is_blocked(self, api_client, site_config):
        response = api_client.get('/api/config-export/system.site')

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_member_access_denied(self, api_client, sender, site_config):
        api_client.force_authenticate(user=sender)
        response = api_client.get('/api/config-export/system.site')

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_superuser_without_role_allowed(self, api_client, django_user_model, site_config):
        root = django_user_model.objects.create_superuser(
            username='root', email='root@test.com', password='testpass123'
        )
        api_client.force_authenticate(user=root)
        response = api_client.get('/api/config-export/system.site')

        assert response.status_code == status.HTTP_200_OK

    def test_injected_store_is_used(self, super_admin):
        class FakeStore:
            def get(self, name):
                return Config(name, {'answer': 42}, is_new=False)

        view = ConfigExportView.as_view(config_store=FakeStore())
        request = APIRequestFactory().get('/api/config-export/anything')
        force_authenticate(request, user=super_admin)

        response = view(request, config_name='anything')

        assert response.status_code == status.HTTP_200_OK
        assert response.data == {'answer': 42}


class TestSeedConfigCommand:
    """Test the seed_config management command."""

    def test_seeds_defaults(self, config_store):
        call_command('seed_config')

        assert config_store.get('contact.settings').get('flood.limit') == 5
        assert config_store.get('system.site').is_new() is False

    def test_keeps_existing_without_force(self, config_store):
        config_store.set('system.site', {'name': 'Custom'})

        call_command('seed_config', names=['system.site'])

        assert config_store.get('system.site').get() == {'name': 'Custom'}

    def test_force_overwrites(self, config_store, settings):
        settings.SITE_NAME = 'Seeded Site'
        config_store.set('system.site', {'name': 'Custom'})

        call_command('seed_config', names=['system.site'], force=True)

        assert config_store.get('system.site').get('name') == 'Seeded Site'
