"""
Development settings for Lantern.

Use this for local development with manage.py runserver.
"""

from .base import *

# SECURITY WARNING: don't run with debug turned on in production!
DEBUG = config('DEBUG', default=True, cast=bool)

# Development-friendly ALLOWED_HOSTS
ALLOWED_HOSTS = config('ALLOWED_HOSTS', default='localhost,127.0.0.1,*', cast=Csv())

# Pick up hand-edited Markdown files without running rebuild_content_index
LANTERN_AUTO_SYNC = config('LANTERN_AUTO_SYNC', default=True, cast=bool)

# Simple console logging for development
LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
        },
    },
    'root': {
        'handlers': ['console'],
        'level': 'INFO',
    },
    'loggers': {
        'django': {
            'handlers': ['console'],
            'level': 'INFO',
            'propagate': False,
        },
        'cms': {
            'handlers': ['console'],
            'level': config('LANTERN_LOG_LEVEL', default='DEBUG'),
            'propagate': False,
        },
        'core': {
            'handlers': ['console'],
            'level': config('LANTERN_LOG_LEVEL', default='DEBUG'),
            'propagate': False,
        },
    },
}

# Show detailed error pages
DEBUG_PROPAGATE_EXCEPTIONS = False
