"""
Project ORM Models.

A project is one client's 14-day delivery. The phase structure is fixed per
kit type; only per-phase status and checklist completion are stored, in the
``phases_state`` JSON column.
"""

from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from domain.shared.value_objects import KitType
from .base import BaseModelWithHistory


class KitTypeChoices(models.TextChoices):
    """Kit type choices."""
    LAUNCH = KitType.LAUNCH.value, 'Launch kit'
    GROWTH = KitType.GROWTH.value, 'Growth kit'


class Project(BaseModelWithHistory):
    """
    Client delivery project.

    ``kit_type`` selects the phase template and is fixed at creation.
    ``phases_state`` holds, per phase id, the status, the started/completed
    timestamps and a label -> bool checklist map.
    """

    DAYS_IN_CYCLE = 14

    user_id = models.CharField(
        max_length=100,
        blank=True,
        db_index=True,
        verbose_name="Client account ID"
    )
    name = models.CharField(
        max_length=200,
        blank=True,
        verbose_name="Client name"
    )
    email = models.EmailField(
        db_index=True,
        verbose_name="Client email"
    )
    kit_type = models.CharField(
        max_length=20,
        choices=KitTypeChoices.choices,
        default=KitTypeChoices.LAUNCH,
        db_index=True,
        verbose_name="Kit type"
    )
    onboarding_answer = models.OneToOneField(
        'persistence.OnboardingAnswer',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='project',
        verbose_name="Onboarding answer"
    )

    # Delivery progress
    phases_state = models.JSONField(
        default=dict,
        blank=True,
        verbose_name="Phase state"
    )
    started_at = models.DateTimeField(
        null=True,
        blank=True,
        verbose_name="Started at"
    )
    current_day_of_14 = models.PositiveSmallIntegerField(
        default=1,
        validators=[MinValueValidator(1), MaxValueValidator(DAYS_IN_CYCLE)],
        verbose_name="Current day of 14"
    )
    next_from_us = models.TextField(
        blank=True,
        verbose_name="Next step from us"
    )
    next_from_you = models.TextField(
        blank=True,
        verbose_name="Next step from client"
    )
    onboarding_percent = models.PositiveSmallIntegerField(
        default=0,
        validators=[MaxValueValidator(100)],
        verbose_name="Onboarding completion, %"
    )

    class Meta:
        db_table = 'projects'
        verbose_name = 'Project'
        verbose_name_plural = 'Projects'
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.name or self.email} ({self.kit_type})"

    @property
    def onboarding_finished(self):
        return self.onboarding_percent == 100
