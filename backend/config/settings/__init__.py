"""
Settings package.

``config.settings`` resolves to dev or prod by DJANGO_ENV; tests point
DJANGO_SETTINGS_MODULE at ``config.settings.test`` directly.
"""

import os

DJANGO_ENV = os.environ.get('DJANGO_ENV', 'dev').lower()

if DJANGO_ENV in ('prod', 'production'):
    from .prod import *
else:
    from .dev import *
