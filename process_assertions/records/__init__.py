"""
Process Assertions Records - Public API
=======================================
Immutable engine records and the sources that expose them.
"""

from process_assertions.records.codec import record_from_json, record_to_json
from process_assertions.records.errors import (
    RecordDecodeError,
    RecordPositionError,
    RecordStreamError,
)
from process_assertions.records.model import (
    UNSET_KEY,
    Record,
    RecordType,
    RejectionType,
)
from process_assertions.records.printer import RecordStreamLogger, format_records
from process_assertions.records.source import (
    InMemoryRecordStream,
    RecordStreamSource,
)
from process_assertions.records.value_types import (
    BpmnElementType,
    DeploymentIntent,
    IncidentIntent,
    JobIntent,
    MessageIntent,
    MessageSubscriptionIntent,
    ProcessInstanceCreationIntent,
    ProcessInstanceIntent,
    ProcessIntent,
    ProcessMessageSubscriptionIntent,
    ValueType,
    VariableIntent,
    intent_type_for,
    resolve_intent,
)

__all__ = [
    "Record",
    "RecordType",
    "RejectionType",
    "UNSET_KEY",
    "ValueType",
    "BpmnElementType",
    "DeploymentIntent",
    "ProcessIntent",
    "ProcessInstanceIntent",
    "ProcessInstanceCreationIntent",
    "JobIntent",
    "MessageIntent",
    "MessageSubscriptionIntent",
    "ProcessMessageSubscriptionIntent",
    "VariableIntent",
    "IncidentIntent",
    "intent_type_for",
    "resolve_intent",
    "RecordStreamSource",
    "InMemoryRecordStream",
    "RecordStreamLogger",
    "format_records",
    "record_from_json",
    "record_to_json",
    "RecordStreamError",
    "RecordPositionError",
    "RecordDecodeError",
]
