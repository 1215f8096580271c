"""
Configuration Export Views
"""
from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status

from core.utils import is_empty
from .permissions import CanExportConfig
from .services import ConfigStore


class ConfigExportView(APIView):
    """
    GET /api/config-export/<config_name>

    Returns the full contents of a stored configuration object.
    """

    permission_classes = [CanExportConfig]

    config_store = None

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        if self.config_store is None:
            self.config_store = ConfigStore()

    def get(self, request, config_name=None):
        if is_empty(config_name):
            return Response(
                {'error': 'Config name parameter is missing.'},
                status=status.HTTP_400_BAD_REQUEST
            )

        config = self.config_store.get(config_name)
        if config.is_new():
            return Response(
                {'error': f"Configuration '{config_name}' does not exist."},
                status=status.HTTP_404_NOT_FOUND
            )

        return Response(config.get(), status=status.HTTP_200_OK)
