"""
Test settings for Lantern.

Used by pytest-django (see pyproject.toml). Individual test cases still
point LANTERN_CONTENT_ROOT at their own temp directory via
core.tests.base.LanternTestCase.
"""

import tempfile

from .base import *

DEBUG = False

LANTERN_CONTENT_ROOT = Path(tempfile.gettempdir()) / 'lantern-test-content'
LANTERN_AUTO_SYNC = False

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
        'LOCATION': 'lantern-test',
    }
}

PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'handlers': {
        'null': {
            'class': 'logging.NullHandler',
        },
    },
    'root': {
        'handlers': ['null'],
        'level': 'WARNING',
    },
}
