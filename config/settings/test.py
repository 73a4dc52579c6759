"""
StockLedger — Test Settings

Used by pytest (see [tool.pytest.ini_options] in pyproject.toml). SQLite
in-memory unless DATABASE_URL points at a real database; the PostgreSQL
advisory-lock and race tests only run against PostgreSQL.

@file config/settings/test.py
"""

from .base import *  # noqa: F401, F403

DEBUG = False

DATABASES = {
    'default': env.db('DATABASE_URL', default='sqlite://:memory:'),  # noqa: F405
}

PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']

CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
    }
}

CELERY_TASK_ALWAYS_EAGER = True
CELERY_TASK_EAGER_PROPAGATES = True
CELERY_BROKER_URL = 'memory://'

REST_FRAMEWORK['DEFAULT_THROTTLE_CLASSES'] = []  # noqa: F405
REST_FRAMEWORK['DEFAULT_RENDERER_CLASSES'] = (  # noqa: F405
    'core.renderers.EnvelopeJSONRenderer',
)

LOGGING['loggers']['stockledger']['propagate'] = True  # noqa: F405
