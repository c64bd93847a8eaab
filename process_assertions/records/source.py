"""
Process Assertions Records - Record Stream Source
=================================================
The capability every query reads from: "give me the current ordered
sequence of all emitted records".

Rules:
- Sources are pull-only; queries never write to them
- Order is emission order (position ASC)
- A later read may return more records, never fewer or reordered ones
"""

from __future__ import annotations

import logging
from threading import Lock
from typing import Iterable, Optional, Protocol, Tuple

from process_assertions.records.errors import RecordPositionError
from process_assertions.records.model import Record

logger = logging.getLogger("process_assertions.records")


# ══════════════════════════════════════════════════════════════
# RECORD STREAM SOURCE PROTOCOL
# ══════════════════════════════════════════════════════════════

class RecordStreamSource(Protocol):
    """
    Read-only view over the engine's record history.

    Implementations may back this with an exporter sink, a database,
    or a file. Each call must reflect the history at call time.
    """

    def records(self) -> Iterable[Record]:
        """Return all records emitted so far, ordered by position."""
        ...  # pragma: no cover


# ══════════════════════════════════════════════════════════════
# IN-MEMORY RECORD STREAM (exporter sink)
# ══════════════════════════════════════════════════════════════

class InMemoryRecordStream:
    """
    Append-only in-memory record log.

    The engine side (an exporter) appends; assertions read snapshots.
    Thread-safe: the engine may append while a test queries.
    """

    def __init__(self, records: Iterable[Record] = ()) -> None:
        self._records: list[Record] = []
        self._lock = Lock()
        for record in records:
            self.append(record)

    def append(self, record: Record) -> None:
        """
        Append one record to the end of the log.

        Raises:
            RecordPositionError: position does not exceed the last one.
        """
        with self._lock:
            last_position = self._records[-1].position if self._records else -1
            if record.position <= last_position:
                raise RecordPositionError(record.position, last_position)
            self._records.append(record)

        logger.debug(
            f"Record appended: position={record.position} "
            f"{record.value_type.value}.{record.intent.name} key={record.key}"
        )

    def extend(self, records: Iterable[Record]) -> None:
        for record in records:
            self.append(record)

    def records(self) -> Tuple[Record, ...]:
        """Snapshot of the log at call time."""
        with self._lock:
            return tuple(self._records)

    @property
    def last_position(self) -> Optional[int]:
        with self._lock:
            return self._records[-1].position if self._records else None

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)
