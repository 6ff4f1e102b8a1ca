"""
Notification Tasks.

Celery tasks for sending e-mail notifications.
"""

from celery import shared_task
from django.core.mail import send_mail
from django.conf import settings
from django.template.loader import render_to_string
import logging

logger = logging.getLogger(__name__)


@shared_task
def send_otp_email(email: str, otp_code: str, name: str = ''):
    """
    Send a login OTP to an admin.

    Args:
        email: Recipient email
        otp_code: One-time password
        name: Admin name used in the greeting
    """
    context = {
        'name': name or email,
        'otp_code': otp_code,
        'ttl_minutes': settings.OTP_TTL_MINUTES,
    }
    try:
        send_mail(
            subject='Your Login OTP Code',
            message=render_to_string('emails/otp.txt', context),
            html_message=render_to_string('emails/otp.html', context),
            from_email=settings.DEFAULT_FROM_EMAIL,
            recipient_list=[email],
            fail_silently=False,
        )

        logger.info(f"Sent OTP email to {email}")
        return {'success': True, 'recipients': 1}

    except Exception as e:
        logger.error(f"Failed to send OTP email to {email}: {e}")
        return {'success': False, 'error': str(e)}


@shared_task
def send_task_assigned_email(task_id: str):
    """
    Tell a client that a new task was added to their project.
    """
    from infrastructure.persistence.models import Task

    task = Task.objects.select_related('project').filter(pk=task_id).first()
    if task is None or not task.project.email:
        logger.warning(f"Task {task_id} not found or project has no email, skipping")
        return {'success': False, 'error': 'task_not_found'}

    context = {
        'name': task.project.name or task.project.email,
        'title': task.title,
        'description': task.description or '',
        'due_date': task.due_date,
    }
    try:
        send_mail(
            subject=f"New task: {task.title}",
            message=render_to_string('emails/task_assigned.txt', context),
            from_email=settings.DEFAULT_FROM_EMAIL,
            recipient_list=[task.project.email],
            fail_silently=False,
        )

        logger.info(f"Sent task {task_id} notification to {task.project.email}")
        return {'success': True, 'recipients': 1}

    except Exception as e:
        logger.error(f"Failed to send task notification: {e}")
        return {'success': False, 'error': str(e)}
