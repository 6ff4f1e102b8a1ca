"""
Task ORM Models.

Tasks an admin assigns to a client inside a project (upload a file, send
some info, review a draft...). Client responses are appended to
``metadata['responses']``.
"""

from django.db import models

from domain.shared.value_objects import TaskStatus, TaskType
from .base import BaseModelWithHistory


class TaskTypeChoices(models.TextChoices):
    """Task type choices."""
    UPLOAD_FILE = TaskType.UPLOAD_FILE.value, 'Upload file'
    SEND_INFO = TaskType.SEND_INFO.value, 'Send info'
    PROVIDE_DETAILS = TaskType.PROVIDE_DETAILS.value, 'Provide details'
    REVIEW = TaskType.REVIEW.value, 'Review'
    OTHER = TaskType.OTHER.value, 'Other'


class TaskStatusChoices(models.TextChoices):
    """Task status choices."""
    PENDING = TaskStatus.PENDING.value, 'Pending'
    IN_PROGRESS = TaskStatus.IN_PROGRESS.value, 'In progress'
    COMPLETED = TaskStatus.COMPLETED.value, 'Completed'
    CANCELLED = TaskStatus.CANCELLED.value, 'Cancelled'


class Task(BaseModelWithHistory):
    """Client task within a project."""

    project = models.ForeignKey(
        'persistence.Project',
        on_delete=models.CASCADE,
        related_name='tasks',
        verbose_name="Project"
    )
    title = models.CharField(
        max_length=300,
        verbose_name="Title"
    )
    description = models.TextField(
        blank=True,
        null=True,
        verbose_name="Description"
    )
    type = models.CharField(
        max_length=30,
        choices=TaskTypeChoices.choices,
        default=TaskTypeChoices.OTHER,
        db_index=True,
        verbose_name="Type"
    )
    status = models.CharField(
        max_length=30,
        choices=TaskStatusChoices.choices,
        default=TaskStatusChoices.PENDING,
        db_index=True,
        verbose_name="Status"
    )
    due_date = models.DateTimeField(
        null=True,
        blank=True,
        verbose_name="Due date"
    )
    completed_at = models.DateTimeField(
        null=True,
        blank=True,
        verbose_name="Completed at"
    )
    attachments = models.JSONField(
        default=list,
        blank=True,
        verbose_name="Attachments"
    )
    metadata = models.JSONField(
        default=dict,
        blank=True,
        verbose_name="Metadata"
    )

    class Meta:
        db_table = 'tasks'
        verbose_name = 'Task'
        verbose_name_plural = 'Tasks'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['project', 'status'], name='tasks_project_status_idx'),
        ]

    def __str__(self):
        return self.title
