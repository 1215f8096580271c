"""
Configuration Models

A configuration object is a named JSON document owned by the site.
"""
from django.db import models


class ConfigObject(models.Model):
    """
    Named configuration document.

    Names are dotted, module first: ``system.site``, ``contact.settings``.
    """

    name = models.CharField(
        max_length=250,
        unique=True,
        help_text="Configuration name, e.g. system.site"
    )

    data = models.JSONField(
        default=dict,
        blank=True,
        help_text="Key/value contents of the configuration object"
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'config_objects'
        ordering = ['name']
        verbose_name = 'Configuration Object'
        verbose_name_plural = 'Configuration Objects'

    def __str__(self):
        return self.name
