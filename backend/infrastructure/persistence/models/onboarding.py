"""
Onboarding ORM Models.

Inbound client data: onboarding form answers, marketing quiz submissions
and audit leads. These rows are written by the public site and only read
(or deleted) from the admin side.
"""

from django.db import models
from django.utils import timezone

from .base import TimeStampedMixin
from .project import KitTypeChoices

import uuid


class OnboardingAnswer(TimeStampedMixin, models.Model):
    """
    Answers a client gave in the onboarding flow.

    ``answers`` is the raw JSON payload, either flat or split into
    ``steps[].fields``. A project is started from it by an admin.
    """

    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False
    )
    user_id = models.CharField(
        max_length=100,
        blank=True,
        db_index=True,
        verbose_name="Client account ID"
    )
    answers = models.JSONField(
        default=dict,
        blank=True,
        verbose_name="Answers"
    )
    completed_at = models.DateTimeField(
        default=timezone.now,
        db_index=True,
        verbose_name="Completed at"
    )

    class Meta:
        db_table = 'onboarding_answers'
        verbose_name = 'Onboarding answer'
        verbose_name_plural = 'Onboarding answers'
        ordering = ['-completed_at']

    def __str__(self):
        return f"Onboarding {self.id} ({self.user_id})"


class QuizSubmission(TimeStampedMixin, models.Model):
    """Brand quiz submission from the marketing site."""

    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False
    )
    first_name = models.CharField(max_length=150, blank=True, verbose_name="First name")
    last_name = models.CharField(max_length=150, blank=True, verbose_name="Last name")
    email = models.EmailField(db_index=True, verbose_name="Email")
    phone_number = models.CharField(max_length=50, blank=True, verbose_name="Phone number")
    referral = models.CharField(max_length=200, blank=True, verbose_name="Referral")
    brand_name = models.CharField(max_length=200, blank=True, verbose_name="Brand name")
    logo_status = models.CharField(max_length=100, blank=True, verbose_name="Logo status")
    brand_goals = models.JSONField(default=list, blank=True, verbose_name="Brand goals")
    online_presence = models.CharField(max_length=200, blank=True, verbose_name="Online presence")
    audience = models.JSONField(default=list, blank=True, verbose_name="Audience")
    brand_style = models.CharField(max_length=200, blank=True, verbose_name="Brand style")
    timeline = models.CharField(max_length=100, blank=True, verbose_name="Timeline")
    preferred_kit = models.CharField(
        max_length=20,
        choices=KitTypeChoices.choices,
        null=True,
        blank=True,
        verbose_name="Preferred kit"
    )

    class Meta:
        db_table = 'quiz_submissions'
        verbose_name = 'Quiz submission'
        verbose_name_plural = 'Quiz submissions'
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.full_name or self.email}"

    @property
    def full_name(self):
        first = (self.first_name or '').strip()
        last = (self.last_name or '').strip()
        return f"{first} {last}".strip()


class Lead(TimeStampedMixin, models.Model):
    """Lead captured by the website audit form."""

    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False
    )

    # Business
    business_name = models.CharField(max_length=200, verbose_name="Business name")
    location = models.CharField(max_length=200, blank=True, verbose_name="Location")
    primary_issue = models.TextField(blank=True, verbose_name="Primary issue")
    monthly_revenue = models.CharField(max_length=100, blank=True, verbose_name="Monthly revenue")
    lead_source = models.CharField(max_length=100, blank=True, verbose_name="Lead source")
    client_value = models.CharField(max_length=100, blank=True, verbose_name="Client value")

    # Contact
    first_name = models.CharField(max_length=150, blank=True, verbose_name="First name")
    last_name = models.CharField(max_length=150, blank=True, verbose_name="Last name")
    role = models.CharField(max_length=100, blank=True, verbose_name="Role")
    whatsapp = models.CharField(max_length=50, blank=True, verbose_name="WhatsApp")
    email = models.EmailField(blank=True, verbose_name="Email")
    website = models.CharField(max_length=300, blank=True, verbose_name="Website")
    instagram = models.CharField(max_length=200, blank=True, verbose_name="Instagram")

    class Meta:
        db_table = 'leads'
        verbose_name = 'Lead'
        verbose_name_plural = 'Leads'
        ordering = ['-created_at']

    def __str__(self):
        return self.business_name
