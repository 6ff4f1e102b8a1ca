"""
Base ORM Models.

Projects and tasks share one base: UUID key, timestamps, audit columns,
soft delete, a version counter and simple-history tracking. Onboarding
rows written by the client app only get timestamps.
"""

import uuid

from django.conf import settings
from django.db import models
from django.utils import timezone
from simple_history.models import HistoricalRecords


class TimeStampedMixin(models.Model):
    """created_at / updated_at."""

    created_at = models.DateTimeField(
        auto_now_add=True,
        verbose_name="Created at"
    )
    updated_at = models.DateTimeField(
        auto_now=True,
        verbose_name="Updated at"
    )

    class Meta:
        abstract = True


# =============================================================================
# MANAGERS
# =============================================================================

class ActiveManager(models.Manager):
    """Hides soft-deleted rows; the default manager for API lookups."""

    def get_queryset(self):
        return super().get_queryset().filter(deleted_at__isnull=True)


class AllObjectsManager(models.Manager):
    """Every row, soft-deleted included (uniqueness checks, imports)."""


# =============================================================================
# BASE MODEL
# =============================================================================

class BaseModel(TimeStampedMixin):
    """
    Audited, soft-deletable model.

    ``version`` goes up by one on every save of an existing row. Saves with
    ``update_fields`` always write the bumped version and ``updated_at``,
    so a partial save never leaves the counter stale in the database.
    """

    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False,
        verbose_name="ID"
    )
    version = models.PositiveIntegerField(
        default=1,
        verbose_name="Version"
    )

    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="%(class)s_created",
        verbose_name="Created by"
    )
    updated_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="%(class)s_updated",
        verbose_name="Updated by"
    )

    deleted_at = models.DateTimeField(
        null=True,
        blank=True,
        verbose_name="Deleted at"
    )
    deleted_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="%(class)s_deleted",
        verbose_name="Deleted by"
    )

    objects = ActiveManager()
    all_objects = AllObjectsManager()

    class Meta:
        abstract = True

    def __str__(self):
        return str(self.id)

    def save(self, *args, **kwargs):
        if not self._state.adding:
            self.version += 1
            update_fields = kwargs.get('update_fields')
            if update_fields is not None:
                kwargs['update_fields'] = set(update_fields) | {'version', 'updated_at'}
        super().save(*args, **kwargs)

    def soft_delete(self, user=None):
        """Hide the row from ``objects``; history keeps the deletion."""
        self.deleted_at = timezone.now()
        self.deleted_by = user
        self.updated_by = user or self.updated_by
        self.save(update_fields=['deleted_at', 'deleted_by', 'updated_by'])


class BaseModelWithHistory(BaseModel):
    """BaseModel plus a django-simple-history table per concrete model."""

    history = HistoricalRecords(inherit=True)

    class Meta:
        abstract = True
