"""
Shared pytest fixtures.
"""
import pytest
from rest_framework.test import APIClient


@pytest.fixture
def api_client():
    """API client for making requests."""
    return APIClient()


@pytest.fixture
def config_store(db):
    from config_export.services import ConfigStore
    return ConfigStore()


@pytest.fixture
def super_admin(django_user_model):
    return django_user_model.objects.create_user(
        username='admin',
        email='admin@test.com',
        password='testpass123',
        role='SUPER_ADMIN'
    )


@pytest.fixture
def sender(django_user_model):
    return django_user_model.objects.create_user(
        username='sender',
        email='sender@test.com',
        password='testpass123',
        first_name='Sam',
        last_name='Sender',
    )


@pytest.fixture
def recipient(django_user_model):
    return django_user_model.objects.create_user(
        username='recipient',
        email='recipient@test.com',
        password='testpass123',
        first_name='Riley',
        last_name='Recipient',
    )
