"""
Test settings.

In-memory SQLite, local-memory e-mail and eager Celery so the suite runs
without PostgreSQL or Redis.
"""

import copy

from .base import *

DEBUG = False

SECRET_KEY = 'test-secret-key-not-for-production'

ALLOWED_HOSTS = ['*']

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
        'LOCATION': 'delivery-test-cache',
    }
}

PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']

EMAIL_BACKEND = 'django.core.mail.backends.locmem.EmailBackend'

CELERY_TASK_ALWAYS_EAGER = True
CELERY_TASK_EAGER_PROPAGATES = True
CELERY_BROKER_URL = 'memory://'
CELERY_RESULT_BACKEND = None

REST_FRAMEWORK = {**REST_FRAMEWORK, 'DEFAULT_THROTTLE_CLASSES': []}

DEFAULT_ADMIN_EMAIL = 'team@example.com'
DEFAULT_ADMIN_OTP = '000000'
DEFAULT_ADMIN_OTP_ECHO = False

# Console only, no log files; propagate so pytest's caplog sees records
LOGGING = copy.deepcopy(LOGGING)
for _logger in LOGGING['loggers'].values():
    _logger['handlers'] = ['console']
    _logger['propagate'] = True
