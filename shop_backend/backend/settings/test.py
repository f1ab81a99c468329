# backend/settings/test.py
"""
PATH: backend/settings/test.py

TEST SETTINGS (pytest-django)

- In-memory SQLite
- Fast password hashing
- Notifications recorded in common.notifications.outbox
- Gregorian calendar stays opt-in per test (override_settings)
"""

from __future__ import annotations

from .base import *  # noqa: F403
from .base import LOGGING, REST_FRAMEWORK

DEBUG = False

SECRET_KEY = "test-only-secret-key"

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

NOTIFICATION_DISPATCHER = "common.notifications.memory_dispatcher"

REST_FRAMEWORK = {
    **REST_FRAMEWORK,
    "DEFAULT_THROTTLE_CLASSES": (),
}

LOGGING = {
    **LOGGING,
    "loggers": {name: {**cfg, "level": "WARNING"} for name, cfg in LOGGING["loggers"].items()},
}
