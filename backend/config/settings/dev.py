"""
Development settings for the delivery admin backend.

Runs without Redis: OTP and task e-mails go to the console and Celery
tasks execute inline, so ``runserver`` is the only process needed.
"""

import copy

from .base import *

DEBUG = True

ALLOWED_HOSTS = ['*']

# Local PostgreSQL by default; DB_ENGINE=sqlite for a throwaway database file.
if config('DB_ENGINE', default='postgresql') == 'sqlite':
    DATABASES = {
        'default': {
            'ENGINE': 'django.db.backends.sqlite3',
            'NAME': BASE_DIR / 'delivery-dev.sqlite3',
        }
    }

# =============================================================================
# DEBUG TOOLBAR / EXTENSIONS
# =============================================================================
INSTALLED_APPS = INSTALLED_APPS + [
    'debug_toolbar',
    'django_extensions',
]

MIDDLEWARE = ['debug_toolbar.middleware.DebugToolbarMiddleware'] + MIDDLEWARE

INTERNAL_IPS = ['127.0.0.1', 'localhost']

DEBUG_TOOLBAR_CONFIG = {
    # The admin dashboard only talks JSON to /api/
    'SHOW_TOOLBAR_CALLBACK': lambda request: DEBUG and not request.path.startswith('/api/'),
}

# =============================================================================
# OTP LOGIN / E-MAIL
# =============================================================================
EMAIL_BACKEND = 'django.core.mail.backends.console.EmailBackend'

DEFAULT_ADMIN_EMAIL = config('DEFAULT_ADMIN_EMAIL', default='team@localhost')
DEFAULT_ADMIN_OTP_ECHO = config('DEFAULT_ADMIN_OTP_ECHO', default=True, cast=bool)

# =============================================================================
# CORS
# =============================================================================
CORS_ALLOWED_ORIGINS = config(
    'CORS_ALLOWED_ORIGINS',
    default='http://localhost:3000,http://127.0.0.1:3000',
    cast=Csv(),
)

# =============================================================================
# CACHE / THROTTLING
# =============================================================================
CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
        'LOCATION': 'delivery-dev-cache',
    }
}

REST_FRAMEWORK = {**REST_FRAMEWORK, 'DEFAULT_THROTTLE_CLASSES': []}

# =============================================================================
# CELERY
# =============================================================================
CELERY_TASK_ALWAYS_EAGER = config('CELERY_TASK_ALWAYS_EAGER', default=True, cast=bool)
CELERY_TASK_EAGER_PROPAGATES = True

# =============================================================================
# LOGGING
# =============================================================================
LOGGING = copy.deepcopy(LOGGING)
for _logger_name in ('domain', 'application', 'presentation', 'infrastructure'):
    LOGGING['loggers'][_logger_name]['level'] = 'DEBUG'
LOGGING['loggers']['django.db.backends'] = {
    'handlers': ['console'],
    'level': config('SQL_LOG_LEVEL', default='INFO'),
    'propagate': False,
}
