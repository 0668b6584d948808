"""Database configuration for the marketplace.

PostgreSQL is the default engine; ``SQL_ENGINE`` may point at SQLite for
local experiments, in which case ``SQL_DATABASE`` is a file path.
"""

import os

from typing import Any, Dict

from .environment import BASE_DIR

engine = os.getenv("SQL_ENGINE", "django.db.backends.postgresql")

if "sqlite" in engine:
    default_db: Dict[str, Any] = {
        "ENGINE": engine,
        "NAME": os.getenv("SQL_DATABASE", str(BASE_DIR / "db.sqlite3")),
    }
else:
    default_db = {
        "ENGINE": engine,
        "NAME": os.getenv("SQL_DATABASE", "marketplace"),
        "USER": os.getenv("SQL_USER", "marketplace"),
        "PASSWORD": os.getenv("SQL_PASSWORD", "marketplace"),
        "HOST": os.getenv("SQL_HOST", "127.0.0.1"),
        "PORT": os.getenv("SQL_PORT", "5432"),
        "CONN_MAX_AGE": int(os.getenv("SQL_CONN_MAX_AGE", "60")),
        "OPTIONS": {
            "options": os.getenv("SQL_OPTIONS", "-c client_encoding=UTF8"),
        },
    }

DATABASES = {"default": default_db}

__all__ = ["DATABASES"]
