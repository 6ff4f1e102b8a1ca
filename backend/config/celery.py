"""
Celery app.

Only e-mail goes through the worker (OTP codes, task-assigned notices);
dev and test settings run tasks eagerly.
"""

import os

from celery import Celery

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings')

app = Celery('delivery')

app.config_from_object('django.conf:settings', namespace='CELERY')

# Task modules live in application.tasks, outside any Django app
app.autodiscover_tasks(['application'])

app.conf.task_routes = {
    'application.tasks.notification_tasks.*': {'queue': 'notifications'},
}
# Undelivered OTP mails expire with the code (OTP_TTL_MINUTES default)
app.conf.task_annotations = {
    'application.tasks.notification_tasks.send_otp_email': {'expires': 600},
}
