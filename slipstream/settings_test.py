"""SQLite-backed settings used for test runs in CI/local development."""

from __future__ import annotations

import os

# Provide defaults so the base settings module can import without a .env file.
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("ALLOWED_HOSTS", "localhost,testserver")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from .settings import *  # noqa: E402,F401,F403

# Use an in-memory SQLite database for tests.
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

# Quiet the error channel; tests assert on it with assertLogs where needed.
LOGGING["loggers"]["app_errors"]["level"] = "CRITICAL"  # noqa: F405

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]
