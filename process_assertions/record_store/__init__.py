"""
Process Assertions Record Store
===============================
Django app persisting exported engine records.

Import models, repository, service and source only after Django
settings are configured.
"""
