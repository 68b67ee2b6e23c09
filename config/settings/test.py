"""Test settings.

SQLite on disk rather than in memory so that the threaded booking tests
share one database across connections. SQLite has no row locks, so
``timeout`` lets a writer wait for another thread's transaction instead of
failing with "database is locked".
"""

from .base import *  # noqa: F401,F403

DEBUG = False

SECRET_KEY = 'test-secret-key'

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': BASE_DIR / 'test_db.sqlite3',  # noqa: F405
        'OPTIONS': {'timeout': 20, 'transaction_mode': 'IMMEDIATE'},
        'TEST': {'NAME': BASE_DIR / 'test_db.sqlite3'},  # noqa: F405
    }
}

PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']

LOGGING['handlers']['console']['level'] = 'WARNING'  # noqa: F405
