"""Test settings for the turf booking project.

Used by pytest-django (see pyproject.toml). The database engine still
comes from DB_ENGINE, so the PostgreSQL-only locking tests run when the
suite is pointed at a PostgreSQL server and are skipped on SQLite.
"""

from .base import *  # noqa: F401,F403

DEBUG = False

ALLOWED_HOSTS = ['testserver', 'localhost']

# Hashing passwords slowly only slows the suite down
PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']

# Manifest storage needs collectstatic; plain storage is enough for tests
STORAGES['staticfiles']['BACKEND'] = 'django.contrib.staticfiles.storage.StaticFilesStorage'  # noqa: F405

LOGGING["loggers"]["apps"]["level"] = "WARNING"  # noqa: F405
LOGGING["loggers"]["shared"]["level"] = "WARNING"  # noqa: F405

# structlog.testing.capture_logs() only sees loggers that are not cached
structlog.configure(cache_logger_on_first_use=False)  # noqa: F405
