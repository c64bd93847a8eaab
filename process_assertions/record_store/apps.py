"""
Process Assertions Record Store - App Configuration
===================================================
This app:
- Persists records exactly as the engine exported them
- Enforces append-only, position-ordered writes
- Serves the stored history back as a RecordStreamSource

This app does NOT:
- Interpret records
- Evaluate assertions
- Talk to the engine
"""

from django.apps import AppConfig


class RecordStoreConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "process_assertions.record_store"
    label = "record_store"
    verbose_name = "Process Assertions Record Store"
