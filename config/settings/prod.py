"""Production settings.

Sensitive values must be provided via environment variables; the secret
key and database name are required.
"""

from .base import *  # noqa: F401,F403

# Never run with debug enabled in production
DEBUG = False

SECRET_KEY = get_env('DJANGO_SECRET_KEY', required=True)  # noqa: F405

ALLOWED_HOSTS = [
    host.strip()
    for host in get_env('DJANGO_ALLOWED_HOSTS', '').split(',')  # noqa: F405
    if host.strip()
]

DATABASES['default'].update({  # noqa: F405
    'ENGINE': get_env('DB_ENGINE', 'django.db.backends.postgresql'),  # noqa: F405
    'NAME': get_env('DB_NAME', required=True),  # noqa: F405
    'CONN_MAX_AGE': int(get_env('DB_CONN_MAX_AGE', 60)),  # noqa: F405
})
