"""
Configuration Store

Read/write access to ConfigObject rows. Callers receive immutable
``Config`` values; a name with no stored row yields a *new* Config.
"""
import copy
import logging

from .models import ConfigObject

logger = logging.getLogger(__name__)


class Config:
    """Snapshot of one configuration object."""

    def __init__(self, name, data=None, is_new=True):
        self.name = name
        self._data = copy.deepcopy(data) if data else {}
        self._is_new = is_new

    def is_new(self):
        """True when nothing is stored under this name."""
        return self._is_new

    def get(self, key='', default=None):
        """
        Return the whole mapping, or one value by dotted key.

            config.get()               -> {'flood': {'limit': 5, ...}, ...}
            config.get('flood.limit')  -> 5
        """
        if not key:
            return copy.deepcopy(self._data)

        value = self._data
        for part in key.split('.'):
            if not isinstance(value, dict) or part not in value:
                return default
            value = value[part]
        return copy.deepcopy(value)

    def __repr__(self):
        return f"<Config {self.name}{' (new)' if self._is_new else ''}>"


class ConfigStore:
    """Database-backed configuration store."""

    def get(self, name):
        obj = ConfigObject.objects.filter(name=name).first()
        if obj is None:
            logger.debug("Configuration %s is not stored", name)
            return Config(name)
        return Config(name, obj.data, is_new=False)

    def set(self, name, data):
        obj, created = ConfigObject.objects.update_or_create(
            name=name,
            defaults={'data': data},
        )
        logger.info("%s configuration %s", 'Created' if created else 'Updated', name)
        return Config(name, obj.data, is_new=False)

    def delete(self, name):
        ConfigObject.objects.filter(name=name).delete()
