"""
Process Assertions Record Store - Export Service
================================================
The single write path for stored records:
    export_record(record)

Write flow:
    1. Lock the latest stored row
    2. Refuse positions that do not continue the stream
    3. Insert the row
All inside one transaction. Nothing is retried or swallowed.
"""

from __future__ import annotations

import logging
from typing import Iterable

from django.db import transaction

from process_assertions.records.errors import RecordPositionError
from process_assertions.records.model import Record
from process_assertions.record_store.models import StoredRecord
from process_assertions.record_store.repository import (
    get_last_position,
    record_to_row,
    save_record,
)

logger = logging.getLogger("process_assertions.record_store")


def export_record(record: Record) -> StoredRecord:
    """
    Persist one engine record at the end of the stored stream.

    Raises:
        RecordPositionError: position is not greater than the last stored one.
    """
    with transaction.atomic():
        last_position = get_last_position(lock=True)
        if last_position is not None and record.position <= last_position:
            raise RecordPositionError(record.position, last_position)
        stored = save_record(record_to_row(record))

    logger.debug(f"Record exported: {stored}")
    return stored


def export_records(records: Iterable[Record]) -> int:
    """Export records in order. Returns the number written."""
    written = 0
    for record in records:
        export_record(record)
        written += 1
    logger.info(f"Exported {written} record(s) to the record store.")
    return written
