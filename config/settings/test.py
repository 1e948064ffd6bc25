"""
Test settings.

Uses PostgreSQL when POSTGRES_HOST is set (CI with a database service),
otherwise an SQLite database so the suite runs without external services.
"""

import os

from .base import *  # noqa: F403,F405

SECRET_KEY = "test-secret-key-not-for-production"

DEBUG = False

ALLOWED_HOSTS = ["testserver", "localhost"]

if os.getenv("POSTGRES_HOST"):
    DATABASES = {
        "default": postgres_database(NAME="test_gemstone_backoffice"),  # noqa: F405
    }
else:
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.sqlite3",
            "NAME": BASE_DIR / "test_db.sqlite3",  # noqa: F405
            "ATOMIC_REQUESTS": True,
        }
    }

# Fast hashing for fixtures
PASSWORD_HASHERS = [
    "django.contrib.auth.hashers.MD5PasswordHasher",
]

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {
            "format": "{levelname} {message}",
            "style": "{",
        },
    },
    "handlers": {
        "console": {
            "level": "WARNING",
            "class": "logging.StreamHandler",
            "formatter": "simple",
        },
    },
    "root": {
        "handlers": ["console"],
        "level": "WARNING",
    },
}
