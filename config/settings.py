"""
Process Assertions - Django Settings (Record Store Only)
========================================================
Django hosts the record store app. The assertion core does not
depend on Django and works with any RecordStreamSource.

Environment overrides:
    PROCESS_ASSERTIONS_RECORD_DB   - sqlite file for stored records
    PROCESS_ASSERTIONS_SECRET_KEY  - Django secret key
    PROCESS_ASSERTIONS_DEBUG       - "1" enables DEBUG
"""

import os
from pathlib import Path

# ── Paths ─────────────────────────────────────────────────────
BASE_DIR = Path(__file__).resolve().parent.parent

# ── Security ──────────────────────────────────────────────────
SECRET_KEY = os.environ.get(
    "PROCESS_ASSERTIONS_SECRET_KEY",
    "process-assertions-dev-key",
)

DEBUG = os.environ.get("PROCESS_ASSERTIONS_DEBUG", "0") == "1"

ALLOWED_HOSTS = []

# ── Installed Apps ────────────────────────────────────────────
INSTALLED_APPS = [
    "django.contrib.contenttypes",
    "process_assertions.record_store",
]

# ── Database ──────────────────────────────────────────────────
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": os.environ.get(
            "PROCESS_ASSERTIONS_RECORD_DB",
            str(BASE_DIR / "records.sqlite3"),
        ),
    }
}

# ── Internationalization ──────────────────────────────────────
TIME_ZONE = "UTC"
USE_TZ = True

# ── Default Primary Key ──────────────────────────────────────
DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"
