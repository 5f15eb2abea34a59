"""
Production settings for Lantern.

Use this for Docker deployment and production environments.
"""

from .base import *

# =============================================================================
# SENTRY ERROR TRACKING (OPTIONAL)
# =============================================================================
# Only initialize Sentry if SENTRY_DSN is provided in environment variables.

SENTRY_DSN = config('SENTRY_DSN', default='')

if SENTRY_DSN:
    import logging
    import re

    import sentry_sdk
    from sentry_sdk.integrations.django import DjangoIntegration
    from sentry_sdk.integrations.logging import LoggingIntegration

    def filter_sensitive_data(event, hint):
        """
        Remove sensitive data from Sentry events before sending.
        Filters: Authorization/Cookie headers, passwords, CSRF tokens.
        """
        if 'request' in event:
            if 'headers' in event['request']:
                for header in ('Authorization', 'Cookie'):
                    if header in event['request']['headers']:
                        event['request']['headers'][header] = '[Filtered]'

            if 'data' in event['request'] and isinstance(event['request']['data'], dict):
                sensitive_fields = ['password', 'csrfmiddlewaretoken', 'token', 'secret']
                for field in sensitive_fields:
                    if field in event['request']['data']:
                        event['request']['data'][field] = '[Filtered]'

        if 'exception' in event and 'values' in event['exception']:
            for exc in event['exception']['values']:
                if 'value' in exc:
                    exc['value'] = re.sub(
                        r'[A-Za-z0-9_-]{64,}',
                        '[REDACTED_TOKEN]',
                        exc['value']
                    )

        return event

    sentry_sdk.init(
        dsn=SENTRY_DSN,
        integrations=[
            DjangoIntegration(
                transaction_style='url',
                middleware_spans=True,
                signals_spans=False,
                cache_spans=True,
            ),
            LoggingIntegration(
                level=logging.INFO,
                event_level=logging.ERROR,
            ),
        ],
        traces_sample_rate=config('SENTRY_TRACES_SAMPLE_RATE', default=0.1, cast=float),
        environment=config('ENVIRONMENT', default='production'),
        release=config('GIT_COMMIT', default='unknown'),
        send_default_pii=False,
        before_send=filter_sensitive_data,
        max_breadcrumbs=50,
        attach_stacktrace=True,
    )

    logger = logging.getLogger(__name__)
    logger.info(
        f"Sentry initialized for environment '{config('ENVIRONMENT', default='production')}'"
    )

# SECURITY WARNING: don't run with debug turned on in production!
DEBUG = config('DEBUG', default=False, cast=bool)

# Production ALLOWED_HOSTS - must be explicitly set
ALLOWED_HOSTS = config('ALLOWED_HOSTS', cast=Csv())

# Content is normally edited through the admin. Turn this on when the
# content directory is also deployed by hand (e.g. git pull).
LANTERN_AUTO_SYNC = config('LANTERN_AUTO_SYNC', default=False, cast=bool)

# WhiteNoise serves static files (admin CSS/JS, site assets)
MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'whitenoise.middleware.WhiteNoiseMiddleware',
    'corsheaders.middleware.CorsMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
    'core.middleware.SentryContextMiddleware',
    'core.middleware.ContentSyncMiddleware',
]

STORAGES = {
    'default': {
        'BACKEND': 'django.core.files.storage.FileSystemStorage',
    },
    'staticfiles': {
        'BACKEND': 'whitenoise.storage.CompressedManifestStaticFilesStorage',
    },
}

# =============================================================================
# PRODUCTION SECURITY SETTINGS
# =============================================================================
# Designed for deployment behind a reverse proxy (nginx/Caddy) with TLS.

SECURE_SSL_REDIRECT = config('SECURE_SSL_REDIRECT', default=False, cast=bool)

SECURE_HSTS_SECONDS = config('SECURE_HSTS_SECONDS', default=31536000, cast=int)
SECURE_HSTS_INCLUDE_SUBDOMAINS = config('SECURE_HSTS_INCLUDE_SUBDOMAINS', default=True, cast=bool)
SECURE_HSTS_PRELOAD = config('SECURE_HSTS_PRELOAD', default=True, cast=bool)

SESSION_COOKIE_SECURE = config('SESSION_COOKIE_SECURE', default=True, cast=bool)
CSRF_COOKIE_SECURE = config('CSRF_COOKIE_SECURE', default=True, cast=bool)

SECURE_CONTENT_TYPE_NOSNIFF = True
X_FRAME_OPTIONS = 'DENY'

# Docker deployments use console logging only (captured by docker logs)
LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'verbose': {
            'format': '{levelname} {asctime} {module} {message}',
            'style': '{',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'verbose',
        },
    },
    'root': {
        'handlers': ['console'],
        'level': config('LOG_LEVEL', default='INFO'),
    },
    'loggers': {
        'django': {
            'handlers': ['console'],
            'level': config('DJANGO_LOG_LEVEL', default='INFO'),
            'propagate': False,
        },
        'django.security': {
            'handlers': ['console'],
            'level': 'WARNING',
            'propagate': False,
        },
    },
}
