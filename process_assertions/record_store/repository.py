"""
Process Assertions Record Store - Repository
============================================
Low-level row access and Record <-> row mapping.
The export service owns ordering guards and transactions.
"""

from __future__ import annotations

from typing import Optional

from django.db.models import QuerySet

from process_assertions.records.model import Record, RecordType, RejectionType
from process_assertions.records.value_types import ValueType, resolve_intent
from process_assertions.record_store.models import StoredRecord


def record_to_row(record: Record) -> dict:
    return {
        "position": record.position,
        "key": record.key,
        "value_type": record.value_type.value,
        "intent": record.intent.name,
        "record_type": record.record_type.value,
        "rejection_type": record.rejection_type.value,
        "rejection_reason": record.rejection_reason,
        "partition_id": record.partition_id,
        "timestamp": record.timestamp,
        "value": dict(record.value),
    }


def row_to_record(row: StoredRecord) -> Record:
    value_type = ValueType(row.value_type)
    return Record(
        position=row.position,
        key=row.key,
        value_type=value_type,
        intent=resolve_intent(value_type, row.intent),
        record_type=RecordType(row.record_type),
        rejection_type=RejectionType(row.rejection_type),
        rejection_reason=row.rejection_reason,
        value=row.value or {},
        timestamp=row.timestamp,
        partition_id=row.partition_id,
    )


def save_record(row: dict) -> StoredRecord:
    """Insert one row. No validation here."""
    return StoredRecord.objects.create(**row)


def get_last_position(*, lock: bool = False) -> Optional[int]:
    """
    Highest stored position, or None for an empty store.

    lock=True takes a row lock for the duration of the transaction.
    """
    query = StoredRecord.objects.order_by("-position")
    if lock:
        query = query.select_for_update()
    latest = query.first()
    return latest.position if latest is not None else None


def load_records(*, after_position: Optional[int] = None) -> QuerySet:
    """Stored rows in emission order, optionally after a position."""
    query = StoredRecord.objects.all()
    if after_position is not None:
        query = query.filter(position__gt=after_position)
    return query.order_by("position")
