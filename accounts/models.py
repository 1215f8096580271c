from django.contrib.auth.models import AbstractUser
from django.conf import settings
from django.db import models
import uuid


class User(AbstractUser):
    """
    Custom User model extending Django's AbstractUser.

    Users are both the senders and the recipients of personal contact messages.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    class UserRole(models.TextChoices):
        SUPER_ADMIN = 'SUPER_ADMIN', 'Super Administrator'
        EDITOR = 'EDITOR', 'Content Editor'
        MEMBER = 'MEMBER', 'Member'

    role = models.CharField(
        max_length=50,
        choices=UserRole.choices,
        default=UserRole.MEMBER,
        db_index=True,
        help_text="User's primary role in the system"
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'users'
        verbose_name = 'User'
        verbose_name_plural = 'Users'

    def __str__(self):
        return f"{self.get_full_name()} ({self.get_role_display()})"

    def get_full_name(self):
        """Return the user's full name or username if name is not set."""
        full_name = super().get_full_name()
        return full_name if full_name else self.username

    @property
    def is_site_admin(self):
        """Super admins and Django superusers manage site configuration."""
        return self.is_superuser or self.role == self.UserRole.SUPER_ADMIN


class UserData(models.Model):
    """
    Per-user preference values, namespaced by module.

    Example: module='contact', name='enabled' holds whether the user
    accepts personal contact messages.
    """

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='data',
        help_text="User the value belongs to"
    )

    module = models.CharField(
        max_length=50,
        help_text="Module that owns the value"
    )

    name = models.CharField(
        max_length=128,
        help_text="Name of the value within the module"
    )

    value = models.JSONField(
        null=True,
        blank=True,
        help_text="Stored value"
    )

    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'users_data'
        verbose_name = 'User Data'
        verbose_name_plural = 'User Data'
        unique_together = [['user', 'module', 'name']]
        indexes = [
            models.Index(fields=['module', 'name'], name='users_data_module_name_idx'),
        ]

    def __str__(self):
        return f"{self.module}.{self.name} for {self.user_id}"
