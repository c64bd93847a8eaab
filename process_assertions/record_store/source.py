"""
Process Assertions Record Store - Record Stream Source
======================================================
RecordStreamSource adapter over the stored records table.
Every records() call runs a fresh ordered query.
"""

from __future__ import annotations

from typing import Optional, Tuple

from process_assertions.records.model import Record
from process_assertions.record_store.repository import load_records, row_to_record


class DjangoRecordStreamSource:
    """
    Read-only view over StoredRecord rows.

    after_position limits the view to records written after a known
    point (e.g. the start of the current test).
    """

    def __init__(self, after_position: Optional[int] = None) -> None:
        self._after_position = after_position

    def records(self) -> Tuple[Record, ...]:
        rows = load_records(after_position=self._after_position)
        return tuple(row_to_record(row) for row in rows)
