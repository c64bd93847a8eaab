"""
Process Assertions - Public API
===============================
Assertions over the append-only record log of a BPMN process engine.

Usage:
    from process_assertions import assert_that

    (
        assert_that(deployment, record_stream)
        .extracting_process_by_bpmn_process_id("looping-task")
        .has_version(1)
        .has_instances(2)
    )

The Django record store (process_assertions.record_store) is NOT
imported here; it requires configured Django settings.
"""

from process_assertions.assertions import (
    DeploymentAssert,
    IncidentAssert,
    JobAssert,
    MessageAssert,
    ProcessAssert,
    ProcessInstanceAssert,
    RecordStreamContext,
    assert_that,
    init_record_stream,
    reset_record_stream,
)
from process_assertions.filters import StreamFilter, filter_for
from process_assertions.records import (
    InMemoryRecordStream,
    Record,
    RecordStreamSource,
    RecordType,
    RejectionType,
    ValueType,
)
from process_assertions.responses import (
    ActivatedJob,
    DeploymentEvent,
    ProcessInstanceEvent,
    ProcessMetadata,
    PublishMessageResponse,
    ResponseKind,
)

__all__ = [
    "assert_that",
    "init_record_stream",
    "reset_record_stream",
    "RecordStreamContext",
    "DeploymentAssert",
    "ProcessAssert",
    "ProcessInstanceAssert",
    "MessageAssert",
    "JobAssert",
    "IncidentAssert",
    "StreamFilter",
    "filter_for",
    "Record",
    "RecordType",
    "RejectionType",
    "ValueType",
    "RecordStreamSource",
    "InMemoryRecordStream",
    "ActivatedJob",
    "DeploymentEvent",
    "ProcessInstanceEvent",
    "ProcessMetadata",
    "PublishMessageResponse",
    "ResponseKind",
]
