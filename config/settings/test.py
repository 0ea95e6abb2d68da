"""Settings used by the test suite.

In-memory SQLite and a fast password hasher keep the API tests quick.
"""

from .base import *  # noqa: F401,F403

DEBUG = False

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']

STORAGES = {
    'default': {'BACKEND': 'django.core.files.storage.FileSystemStorage'},
    'staticfiles': {'BACKEND': 'django.contrib.staticfiles.storage.StaticFilesStorage'},
}

BOOKING_DEFAULT_DATES = ['2025-12-22', '2025-12-23']

LOGGING['handlers']['console']['level'] = 'WARNING'  # noqa: F405
