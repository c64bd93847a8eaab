"""
Process Assertions Filters - Stream Filter
==========================================
Composable, lazily evaluated predicates over a record stream.

Rules:
- A filter is scoped to exactly one value type
- Every with_*() call returns a NEW filter (filters are immutable values)
- Clauses combine by AND
- A second clause on the same dimension replaces the first
- Nothing is read until stream() or a terminal lookup is called
- stream() re-reads the source on every call (no caching)
- An empty result is NOT an error; callers decide what it means

Each value type has its own filter class exposing only the value
fields that exist for that category.
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Dict, Iterator, List, Optional, Tuple, Type

from process_assertions.records.model import Record, RecordType, RejectionType
from process_assertions.records.source import RecordStreamSource
from process_assertions.records.value_types import ValueType, intent_type_for

logger = logging.getLogger("process_assertions.filters")

_RECORD_ATTRIBUTES = frozenset({"key", "intent", "record_type", "rejection_type"})
_MISSING = object()


def _same(actual: Any, candidate: Any) -> bool:
    """Equal value AND equal type (True must not match 1)."""
    return type(actual) is type(candidate) and actual == candidate


# ══════════════════════════════════════════════════════════════
# BASE FILTER
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class StreamFilter:
    """
    Immutable query over one category of records.

    Fields:
        source:     Live record stream source (shared, never mutated).
        value_type: The only category this filter can ever return.
        criteria:   Ordered (dimension, accepted values) clauses.
    """

    source: RecordStreamSource
    value_type: ValueType
    criteria: Tuple[Tuple[str, Tuple[Any, ...]], ...] = ()

    VALUE_TYPE: ClassVar[Optional[ValueType]] = None

    def __post_init__(self):
        if not isinstance(self.value_type, ValueType):
            raise ValueError("value_type must be ValueType.")
        if self.VALUE_TYPE is not None and self.value_type != self.VALUE_TYPE:
            raise ValueError(
                f"{type(self).__name__} only filters {self.VALUE_TYPE.value} "
                f"records, got {self.value_type.value}."
            )

    # ── Clause building ───────────────────────────────────────

    def _with(self, dimension: str, *accepted: Any):
        if not accepted:
            raise ValueError(f"At least one value is required for '{dimension}'.")
        clauses = dict(self.criteria)
        clauses[dimension] = tuple(accepted)
        return dataclasses.replace(self, criteria=tuple(clauses.items()))

    def with_key(self, key: int):
        return self._with("key", key)

    def with_intent(self, *intents: Enum):
        """Match records whose intent is any of the given intents."""
        intent_type = intent_type_for(self.value_type)
        for intent in intents:
            if not isinstance(intent, intent_type):
                raise ValueError(
                    f"Intent {intent!r} is not an intent of "
                    f"{self.value_type.value} records."
                )
        return self._with("intent", *intents)

    def with_rejection_type(self, rejection_type: RejectionType):
        return self._with("rejection_type", rejection_type)

    def with_record_type(self, record_type: RecordType):
        return self._with("record_type", record_type)

    def _with_value(self, field_name: str, value: Any):
        return self._with(field_name, value)

    # ── Evaluation ────────────────────────────────────────────

    def matches(self, record: Record) -> bool:
        if record.value_type != self.value_type:
            return False

        for dimension, accepted in self.criteria:
            if dimension in _RECORD_ATTRIBUTES:
                actual = getattr(record, dimension)
            else:
                actual = record.value.get(dimension, _MISSING)
            if not any(_same(actual, candidate) for candidate in accepted):
                return False
        return True

    def stream(self) -> Iterator[Record]:
        """
        Lazily yield matching records in emission order.

        Reads the source's current history each time it is called.
        """
        logger.debug(f"Querying {self.describe()}")
        for record in self.source.records():
            if self.matches(record):
                yield record

    def to_list(self) -> List[Record]:
        return list(self.stream())

    def first(self) -> Optional[Record]:
        return next(self.stream(), None)

    def last(self) -> Optional[Record]:
        found = None
        for record in self.stream():
            found = record
        return found

    def count(self) -> int:
        return sum(1 for _ in self.stream())

    def exists(self) -> bool:
        return self.first() is not None

    def describe(self) -> str:
        parts = []
        for dimension, accepted in self.criteria:
            shown = [a.name if isinstance(a, Enum) else repr(a) for a in accepted]
            if len(shown) == 1:
                parts.append(f"{dimension}={shown[0]}")
            else:
                parts.append(f"{dimension} in ({', '.join(shown)})")
        return f"{self.value_type.value}[{', '.join(parts)}]"


# ══════════════════════════════════════════════════════════════
# CATEGORY FILTERS
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class DeploymentRecordFilter(StreamFilter):
    VALUE_TYPE: ClassVar[Optional[ValueType]] = ValueType.DEPLOYMENT


@dataclass(frozen=True)
class ProcessRecordFilter(StreamFilter):
    VALUE_TYPE: ClassVar[Optional[ValueType]] = ValueType.PROCESS

    def with_bpmn_process_id(self, bpmn_process_id: str):
        return self._with_value("bpmn_process_id", bpmn_process_id)

    def with_process_definition_key(self, process_definition_key: int):
        return self._with_value("process_definition_key", process_definition_key)

    def with_resource_name(self, resource_name: str):
        return self._with_value("resource_name", resource_name)

    def with_version(self, version: int):
        return self._with_value("version", version)


@dataclass(frozen=True)
class ProcessInstanceRecordFilter(StreamFilter):
    VALUE_TYPE: ClassVar[Optional[ValueType]] = ValueType.PROCESS_INSTANCE

    def with_process_instance_key(self, process_instance_key: int):
        return self._with_value("process_instance_key", process_instance_key)

    def with_process_definition_key(self, process_definition_key: int):
        return self._with_value("process_definition_key", process_definition_key)

    def with_bpmn_process_id(self, bpmn_process_id: str):
        return self._with_value("bpmn_process_id", bpmn_process_id)

    def with_element_id(self, element_id: str):
        return self._with_value("element_id", element_id)

    def with_bpmn_element_type(self, bpmn_element_type: str):
        return self._with_value("bpmn_element_type", bpmn_element_type)


@dataclass(frozen=True)
class ProcessInstanceCreationRecordFilter(StreamFilter):
    VALUE_TYPE: ClassVar[Optional[ValueType]] = ValueType.PROCESS_INSTANCE_CREATION

    def with_bpmn_process_id(self, bpmn_process_id: str):
        return self._with_value("bpmn_process_id", bpmn_process_id)


@dataclass(frozen=True)
class JobRecordFilter(StreamFilter):
    VALUE_TYPE: ClassVar[Optional[ValueType]] = ValueType.JOB

    def with_process_instance_key(self, process_instance_key: int):
        return self._with_value("process_instance_key", process_instance_key)

    def with_element_id(self, element_id: str):
        return self._with_value("element_id", element_id)

    def with_job_type(self, job_type: str):
        return self._with_value("type", job_type)


@dataclass(frozen=True)
class MessageRecordFilter(StreamFilter):
    VALUE_TYPE: ClassVar[Optional[ValueType]] = ValueType.MESSAGE

    def with_message_name(self, name: str):
        return self._with_value("name", name)

    def with_correlation_key(self, correlation_key: str):
        return self._with_value("correlation_key", correlation_key)


@dataclass(frozen=True)
class MessageSubscriptionRecordFilter(StreamFilter):
    VALUE_TYPE: ClassVar[Optional[ValueType]] = ValueType.MESSAGE_SUBSCRIPTION

    def with_message_key(self, message_key: int):
        return self._with_value("message_key", message_key)

    def with_process_instance_key(self, process_instance_key: int):
        return self._with_value("process_instance_key", process_instance_key)


@dataclass(frozen=True)
class ProcessMessageSubscriptionRecordFilter(StreamFilter):
    VALUE_TYPE: ClassVar[Optional[ValueType]] = ValueType.PROCESS_MESSAGE_SUBSCRIPTION

    def with_message_key(self, message_key: int):
        return self._with_value("message_key", message_key)

    def with_message_name(self, message_name: str):
        return self._with_value("message_name", message_name)

    def with_process_instance_key(self, process_instance_key: int):
        return self._with_value("process_instance_key", process_instance_key)


@dataclass(frozen=True)
class VariableRecordFilter(StreamFilter):
    VALUE_TYPE: ClassVar[Optional[ValueType]] = ValueType.VARIABLE

    def with_process_instance_key(self, process_instance_key: int):
        return self._with_value("process_instance_key", process_instance_key)

    def with_name(self, name: str):
        return self._with_value("name", name)

    def with_scope_key(self, scope_key: int):
        return self._with_value("scope_key", scope_key)


@dataclass(frozen=True)
class IncidentRecordFilter(StreamFilter):
    VALUE_TYPE: ClassVar[Optional[ValueType]] = ValueType.INCIDENT

    def with_process_instance_key(self, process_instance_key: int):
        return self._with_value("process_instance_key", process_instance_key)

    def with_job_key(self, job_key: int):
        return self._with_value("job_key", job_key)

    def with_element_id(self, element_id: str):
        return self._with_value("element_id", element_id)


# ══════════════════════════════════════════════════════════════
# FACTORY
# ══════════════════════════════════════════════════════════════

FILTERS_BY_VALUE_TYPE: Dict[ValueType, Type[StreamFilter]] = {
    ValueType.DEPLOYMENT: DeploymentRecordFilter,
    ValueType.PROCESS: ProcessRecordFilter,
    ValueType.PROCESS_INSTANCE: ProcessInstanceRecordFilter,
    ValueType.PROCESS_INSTANCE_CREATION: ProcessInstanceCreationRecordFilter,
    ValueType.JOB: JobRecordFilter,
    ValueType.MESSAGE: MessageRecordFilter,
    ValueType.MESSAGE_SUBSCRIPTION: MessageSubscriptionRecordFilter,
    ValueType.PROCESS_MESSAGE_SUBSCRIPTION: ProcessMessageSubscriptionRecordFilter,
    ValueType.VARIABLE: VariableRecordFilter,
    ValueType.INCIDENT: IncidentRecordFilter,
}


def filter_for(source: RecordStreamSource, value_type: ValueType) -> StreamFilter:
    """Return an empty filter scoped to one value type."""
    try:
        filter_type = FILTERS_BY_VALUE_TYPE[value_type]
    except KeyError as exc:
        raise ValueError(f"No stream filter for value type {value_type!r}.") from exc
    return filter_type(source=source, value_type=value_type)


def deployment_records(source: RecordStreamSource) -> DeploymentRecordFilter:
    return filter_for(source, ValueType.DEPLOYMENT)


def process_records(source: RecordStreamSource) -> ProcessRecordFilter:
    return filter_for(source, ValueType.PROCESS)


def process_instance_records(source: RecordStreamSource) -> ProcessInstanceRecordFilter:
    return filter_for(source, ValueType.PROCESS_INSTANCE)


def job_records(source: RecordStreamSource) -> JobRecordFilter:
    return filter_for(source, ValueType.JOB)


def message_records(source: RecordStreamSource) -> MessageRecordFilter:
    return filter_for(source, ValueType.MESSAGE)


def process_message_subscription_records(
    source: RecordStreamSource,
) -> ProcessMessageSubscriptionRecordFilter:
    return filter_for(source, ValueType.PROCESS_MESSAGE_SUBSCRIPTION)


def variable_records(source: RecordStreamSource) -> VariableRecordFilter:
    return filter_for(source, ValueType.VARIABLE)


def incident_records(source: RecordStreamSource) -> IncidentRecordFilter:
    return filter_for(source, ValueType.INCIDENT)
