"""
Celery tasks.
"""

from .notification_tasks import send_otp_email, send_task_assigned_email

__all__ = ['send_otp_email', 'send_task_assigned_email']
