"""
User Models.

Admin accounts. Admins sign in with their email and a one-time password,
so the model has no username and no usable password.
"""

from django.db import models
from django.contrib.auth.models import AbstractUser, BaseUserManager

import uuid


class UserManager(BaseUserManager):
    """Manager for email-based admin accounts."""

    use_in_migrations = True

    def _create_user(self, email, password=None, **extra_fields):
        if not email:
            raise ValueError('Email is required')
        email = self.normalize_email(email).lower()
        user = self.model(email=email, **extra_fields)
        if password:
            user.set_password(password)
        else:
            user.set_unusable_password()
        user.save(using=self._db)
        return user

    def create_user(self, email, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', False)
        extra_fields.setdefault('is_superuser', False)
        return self._create_user(email, password, **extra_fields)

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        extra_fields.setdefault('role', User.ROLE_SUPER_ADMIN)
        return self._create_user(email, password, **extra_fields)

    def get_by_email(self, email):
        """Case-insensitive lookup; returns None if there is no such admin."""
        if not email:
            return None
        return self.filter(email__iexact=email.strip()).first()


class User(AbstractUser):
    """
    Admin user.

    Extends Django's AbstractUser: email is the login, ``name`` replaces the
    first/last name pair and the OTP columns hold the pending login code.
    """

    ROLE_ADMIN = 'admin'
    ROLE_SUPER_ADMIN = 'super_admin'
    ROLE_CHOICES = [
        (ROLE_ADMIN, 'Admin'),
        (ROLE_SUPER_ADMIN, 'Super admin'),
    ]

    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False
    )

    username = None
    first_name = None
    last_name = None

    email = models.EmailField(
        unique=True,
        verbose_name="Email"
    )
    name = models.CharField(
        max_length=200,
        blank=True,
        verbose_name="Name"
    )
    role = models.CharField(
        max_length=30,
        choices=ROLE_CHOICES,
        default=ROLE_ADMIN,
        verbose_name="Role"
    )

    # One-time password login
    otp_code = models.CharField(
        max_length=12,
        blank=True,
        null=True,
        verbose_name="OTP code"
    )
    otp_expires_at = models.DateTimeField(
        null=True,
        blank=True,
        verbose_name="OTP expires at"
    )

    # Metadata
    last_activity = models.DateTimeField(
        null=True,
        blank=True,
        verbose_name="Last activity"
    )

    objects = UserManager()

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = []

    class Meta:
        db_table = 'admins'
        verbose_name = 'Admin'
        verbose_name_plural = 'Admins'
        ordering = ['email']

    def __str__(self):
        return self.name or self.email

    def save(self, *args, **kwargs):
        if self.email:
            self.email = self.email.strip().lower()
        super().save(*args, **kwargs)

    def get_full_name(self):
        return self.name or self.email

    def get_short_name(self):
        return self.name.split(' ')[0] if self.name else self.email

    def clear_otp(self):
        self.otp_code = None
        self.otp_expires_at = None
