"""
Audit ORM Models.

Who signed in, who started which project, who imported what.
"""

import uuid

from django.conf import settings
from django.db import models


class AuditLog(models.Model):
    """Admin action log entry."""

    ACTION_LOGIN = 'login'
    ACTION_LOGOUT = 'logout'
    ACTION_START_PROJECT = 'start_project'
    ACTION_IMPORT = 'import'
    ACTION_CHOICES = [
        (ACTION_LOGIN, 'Login'),
        (ACTION_LOGOUT, 'Logout'),
        (ACTION_START_PROJECT, 'Start project'),
        (ACTION_IMPORT, 'CSV import'),
    ]

    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False
    )

    # When
    timestamp = models.DateTimeField(
        auto_now_add=True,
        db_index=True,
        verbose_name="Timestamp"
    )

    # Who
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='audit_logs',
        verbose_name="User"
    )
    user_ip = models.GenericIPAddressField(
        null=True,
        blank=True,
        verbose_name="IP address"
    )
    user_agent = models.CharField(
        max_length=500,
        blank=True,
        verbose_name="User agent"
    )

    # What
    action = models.CharField(
        max_length=20,
        choices=ACTION_CHOICES,
        db_index=True,
        verbose_name="Action"
    )
    object_id = models.CharField(
        max_length=100,
        blank=True,
        db_index=True,
        verbose_name="Object ID"
    )
    object_repr = models.CharField(
        max_length=500,
        blank=True,
        verbose_name="Object"
    )
    extra_data = models.JSONField(
        default=dict,
        blank=True,
        verbose_name="Extra data"
    )

    class Meta:
        db_table = 'audit_log'
        verbose_name = 'Audit log entry'
        verbose_name_plural = 'Audit log'
        ordering = ['-timestamp']
        indexes = [
            models.Index(fields=['user', 'timestamp'], name='audit_log_user_ts_idx'),
            models.Index(fields=['action', 'timestamp'], name='audit_log_action_ts_idx'),
        ]

    def __str__(self):
        return f"{self.timestamp}: {self.user} - {self.get_action_display()} {self.object_repr}"

    @classmethod
    def record(cls, action, user=None, obj=None, user_ip=None, user_agent='', **extra_data):
        """Write one entry; ``obj`` fills object_id / object_repr."""
        return cls.objects.create(
            action=action,
            user=user,
            user_ip=user_ip,
            user_agent=(user_agent or '')[:500],
            object_id=str(obj.pk) if obj is not None else '',
            object_repr=str(obj)[:500] if obj is not None else '',
            extra_data=extra_data,
        )
