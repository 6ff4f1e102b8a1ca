"""
OTP Authentication Service.

Admins sign in with their email and a short numeric one-time password.
The code is stored on the admin row with an expiry and sent by e-mail
through Celery. A configured default admin uses a fixed code instead and
never gets an e-mail.
"""

from dataclasses import dataclass
from datetime import timedelta
import logging
import secrets
from typing import Optional

from django.conf import settings
from django.contrib.auth import get_user_model
from django.db import transaction
from django.utils import timezone

from domain.shared.exceptions import AuthorizationException, ValidationException

logger = logging.getLogger(__name__)

GENERIC_OTP_MESSAGE = 'If an account exists with this email, an OTP has been sent.'


def generate_otp(length: Optional[int] = None) -> str:
    """Random numeric code of ``length`` digits (no leading zero)."""
    length = length or settings.OTP_LENGTH
    first = str(secrets.randbelow(9) + 1)
    rest = ''.join(str(secrets.randbelow(10)) for _ in range(length - 1))
    return first + rest


def normalize_email(email) -> str:
    if not isinstance(email, str):
        return ''
    return email.strip().lower()


@dataclass
class OTPRequestResult:
    message: str
    otp: Optional[str] = None


class OTPAuthService:
    """Issue and verify login OTPs."""

    def __init__(self, user_model=None):
        self.User = user_model or get_user_model()

    def _default_admin_email(self) -> str:
        return normalize_email(getattr(settings, 'DEFAULT_ADMIN_EMAIL', ''))

    def _is_default_admin(self, email: str) -> bool:
        default_email = self._default_admin_email()
        return bool(default_email) and email == default_email

    def _expiry(self):
        return timezone.now() + timedelta(minutes=settings.OTP_TTL_MINUTES)

    def request_otp(self, email) -> OTPRequestResult:
        """
        Store a fresh OTP for an admin and queue the e-mail.

        Unknown emails get the same generic answer as known ones.
        """
        from application.tasks.notification_tasks import send_otp_email

        email = normalize_email(email)
        if not email:
            raise ValidationException('Email is required', field='email')

        admin = self.User.objects.get_by_email(email)
        if admin is None or not admin.is_active:
            logger.info(f"OTP requested for unknown email {email}")
            return OTPRequestResult(message=GENERIC_OTP_MESSAGE)

        if self._is_default_admin(email):
            admin.otp_code = settings.DEFAULT_ADMIN_OTP
            admin.otp_expires_at = self._expiry()
            admin.save(update_fields=['otp_code', 'otp_expires_at'])
            logger.info(f"Default admin OTP set for {email} (not sent via email)")
            echo = settings.DEFAULT_ADMIN_OTP if settings.DEFAULT_ADMIN_OTP_ECHO else None
            return OTPRequestResult(
                message='OTP ready. Use the default admin OTP.',
                otp=echo,
            )

        code = generate_otp()
        admin.otp_code = code
        admin.otp_expires_at = self._expiry()
        admin.save(update_fields=['otp_code', 'otp_expires_at'])

        send_otp_email.delay(admin.email, code, admin.name)
        logger.info(f"OTP issued for {email}")
        return OTPRequestResult(message='OTP has been sent to your email address.')

    def verify_otp(self, email, otp):
        """
        Check an OTP and return the admin.

        Raises ValidationException when email/otp are missing and
        AuthorizationException when the code cannot be accepted.
        The stored code is cleared on success.
        """
        email = normalize_email(email)
        otp = str(otp).strip() if otp is not None else ''
        if not email or not otp:
            raise ValidationException('Email and OTP are required')

        with transaction.atomic():
            admin = self.User.objects.select_for_update().filter(email__iexact=email).first()
            if admin is None or not admin.is_active:
                logger.info(f"Login failed for {email}: unknown admin")
                raise AuthorizationException('Invalid email or OTP', reason='unknown_admin')

            if self._is_default_admin(email) and otp == settings.DEFAULT_ADMIN_OTP:
                logger.info(f"Default admin login for {email}")
            else:
                if not admin.otp_code or not admin.otp_expires_at:
                    logger.info(f"Login failed for {email}: no OTP")
                    raise AuthorizationException(
                        'No OTP found. Please request a new OTP.', reason='missing'
                    )
                if timezone.now() > admin.otp_expires_at:
                    logger.info(f"Login failed for {email}: OTP expired")
                    raise AuthorizationException(
                        'OTP has expired. Please request a new OTP.', reason='expired'
                    )
                if not secrets.compare_digest(admin.otp_code, otp):
                    logger.info(f"Login failed for {email}: wrong OTP")
                    raise AuthorizationException(
                        'Invalid OTP. Please check your email and try again.', reason='mismatch'
                    )

            admin.clear_otp()
            admin.last_login = timezone.now()
            admin.last_activity = admin.last_login
            admin.save(update_fields=['otp_code', 'otp_expires_at', 'last_login', 'last_activity'])

        logger.info(f"Admin {email} logged in")
        return admin
