"""
Process Assertions Records - Record Stream Logger
=================================================
Renders the current record stream as a table for diagnostics,
typically after a failing assertion.
"""

from __future__ import annotations

import logging
from typing import Iterable, List

from process_assertions.records.model import Record, RejectionType
from process_assertions.records.source import RecordStreamSource

logger = logging.getLogger("process_assertions.records")

_COLUMNS = ("POSITION", "KEY", "VALUE TYPE", "INTENT", "REJECTION", "VALUE")


def _row(record: Record) -> tuple:
    rejection = ""
    if record.rejection_type != RejectionType.NULL_VAL:
        rejection = f"{record.rejection_type.value}: {record.rejection_reason}"
    value = ", ".join(f"{name}={item!r}" for name, item in record.value.items())
    return (
        str(record.position),
        str(record.key),
        record.value_type.value,
        record.intent.name,
        rejection,
        value,
    )


def format_records(records: Iterable[Record]) -> str:
    """Format records as an aligned, pipe-separated table."""
    rows: List[tuple] = [_COLUMNS] + [_row(r) for r in records]
    widths = [max(len(row[i]) for row in rows) for i in range(len(_COLUMNS) - 1)]

    lines = []
    for row in rows:
        cells = [cell.ljust(width) for cell, width in zip(row, widths)]
        cells.append(row[-1])
        lines.append(" | ".join(cells).rstrip())
    return "\n".join(lines)


class RecordStreamLogger:
    """Logs every record of a source at INFO level."""

    def __init__(
        self,
        record_stream_source: RecordStreamSource,
        log: logging.Logger = logger,
    ) -> None:
        self._source = record_stream_source
        self._log = log

    def log(self) -> str:
        records = tuple(self._source.records())
        table = format_records(records)
        self._log.info(
            f"Record stream ({len(records)} records):\n{table}"
        )
        return table
