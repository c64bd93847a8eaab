"""
Process Assertions Records - Exporter JSON Codec
================================================
Converts between the engine's exporter JSON format and Record.

Exporter format (camelCase):
    {
        "position": 12, "key": 2251799813685251,
        "valueType": "PROCESS_INSTANCE", "intent": "ELEMENT_ACTIVATED",
        "recordType": "EVENT", "rejectionType": "NULL_VAL",
        "rejectionReason": "", "timestamp": 1700000000000,
        "partitionId": 1,
        "value": {"bpmnProcessId": "looping-task", ...}
    }

Value field names are converted camelCase <-> snake_case.
Timestamps are epoch milliseconds (UTC).
"""

from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Any, Mapping

from process_assertions.records.errors import RecordDecodeError
from process_assertions.records.model import (
    UNSET_KEY,
    Record,
    RecordType,
    RejectionType,
)
from process_assertions.records.value_types import ValueType, resolve_intent

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])([A-Z])")


def camel_to_snake(name: str) -> str:
    return _CAMEL_BOUNDARY.sub(r"_\1", name).lower()


def snake_to_camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def _required(data: Mapping[str, Any], name: str) -> Any:
    if name not in data:
        raise RecordDecodeError(f"missing field '{name}'.")
    return data[name]


def _enum_member(enum_type, raw: Any, field_name: str):
    try:
        return enum_type(raw)
    except ValueError as exc:
        raise RecordDecodeError(
            f"unknown {field_name} '{raw}'."
        ) from exc


# ══════════════════════════════════════════════════════════════
# DECODE
# ══════════════════════════════════════════════════════════════

def record_from_json(data: Mapping[str, Any]) -> Record:
    """
    Build a Record from one exporter JSON object.

    Raises:
        RecordDecodeError: missing or malformed field, unknown value type or intent.
    """
    value_type = _enum_member(ValueType, _required(data, "valueType"), "valueType")

    intent_name = _required(data, "intent")
    try:
        intent = resolve_intent(value_type, intent_name)
    except (KeyError, TypeError) as exc:
        raise RecordDecodeError(
            f"intent '{intent_name}' is not defined for value type "
            f"{value_type.value}."
        ) from exc

    try:
        raw_timestamp = data.get("timestamp")
        timestamp = None
        if raw_timestamp is not None:
            timestamp = datetime.fromtimestamp(raw_timestamp / 1000, tz=timezone.utc)

        raw_value = data.get("value") or {}
        value = {camel_to_snake(name): item for name, item in raw_value.items()}

        return Record(
            position=int(_required(data, "position")),
            key=int(data.get("key", UNSET_KEY)),
            value_type=value_type,
            intent=intent,
            record_type=_enum_member(
                RecordType, data.get("recordType", "EVENT"), "recordType"
            ),
            rejection_type=_enum_member(
                RejectionType,
                data.get("rejectionType", "NULL_VAL"),
                "rejectionType",
            ),
            rejection_reason=data.get("rejectionReason") or "",
            value=value,
            timestamp=timestamp,
            partition_id=int(data.get("partitionId", 1)),
        )
    except (TypeError, ValueError, AttributeError, OverflowError) as exc:
        raise RecordDecodeError(str(exc)) from exc


# ══════════════════════════════════════════════════════════════
# ENCODE
# ══════════════════════════════════════════════════════════════

def record_to_json(record: Record) -> dict:
    """Render a Record in the exporter JSON format."""
    timestamp = None
    if record.timestamp is not None:
        timestamp = int(record.timestamp.timestamp() * 1000)

    return {
        "position": record.position,
        "key": record.key,
        "valueType": record.value_type.value,
        "intent": record.intent.name,
        "recordType": record.record_type.value,
        "rejectionType": record.rejection_type.value,
        "rejectionReason": record.rejection_reason,
        "timestamp": timestamp,
        "partitionId": record.partition_id,
        "value": {snake_to_camel(name): item for name, item in record.value.items()},
    }
