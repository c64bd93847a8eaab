"""
Process Assertions - Process Definition Assertions
==================================================
Checks on one deployed process definition.

Scalar checks read the single PROCESS.CREATED record of the
definition; instance checks count process-level ELEMENT_ACTIVATING
records. Both run against the live stream on every call.
"""

from __future__ import annotations

from process_assertions.assertions.base import (
    AbstractRecordAssert,
    numeric_mismatch,
    quoted_mismatch,
)
from process_assertions.filters.stream_filter import (
    process_instance_records,
    process_records,
)
from process_assertions.records.model import Record, RejectionType
from process_assertions.records.source import RecordStreamSource
from process_assertions.records.value_types import (
    BpmnElementType,
    ProcessInstanceIntent,
    ProcessIntent,
)
from process_assertions.responses import ProcessMetadata


class ProcessAssert(AbstractRecordAssert):
    """Assertions for a deployed process (wraps its ProcessMetadata)."""

    def __init__(
        self,
        actual: ProcessMetadata,
        record_stream_source: RecordStreamSource,
    ) -> None:
        super().__init__(actual, record_stream_source)

    @property
    def process_definition_key(self) -> int:
        return self.actual.process_definition_key

    def _process_record(self) -> Record:
        matches = (
            process_records(self.record_stream_source)
            .with_process_definition_key(self.process_definition_key)
            .with_rejection_type(RejectionType.NULL_VAL)
            .with_intent(ProcessIntent.CREATED)
            .to_list()
        )
        return self._require_single(
            matches,
            f"Expected to find one process record for process definition key "
            f"{self.process_definition_key} but found {len(matches)}: "
            f"{[r.position for r in matches]}",
        )

    def _number_of_instances(self) -> int:
        return (
            process_instance_records(self.record_stream_source)
            .with_process_definition_key(self.process_definition_key)
            .with_bpmn_element_type(BpmnElementType.PROCESS)
            .with_rejection_type(RejectionType.NULL_VAL)
            .with_intent(ProcessInstanceIntent.ELEMENT_ACTIVATING)
            .count()
        )

    # ── Scalar fields ─────────────────────────────────────────

    def has_bpmn_process_id(self, expected_bpmn_process_id: str) -> ProcessAssert:
        actual_id = self._process_record().get("bpmn_process_id")
        self._require(
            actual_id == expected_bpmn_process_id,
            quoted_mismatch("BPMN process ID", expected_bpmn_process_id, actual_id),
        )
        return self

    def has_version(self, expected_version: int) -> ProcessAssert:
        actual_version = self._process_record().get("version")
        self._require(
            actual_version == expected_version,
            numeric_mismatch("version", expected_version, actual_version),
        )
        return self

    def has_resource_name(self, expected_resource_name: str) -> ProcessAssert:
        actual_name = self._process_record().get("resource_name")
        self._require(
            actual_name == expected_resource_name,
            quoted_mismatch("resource name", expected_resource_name, actual_name),
        )
        return self

    # ── Instances ─────────────────────────────────────────────

    def has_any_instances(self) -> ProcessAssert:
        self._require(self._number_of_instances() > 0, "The process has no instances")
        return self

    def has_no_instances(self) -> ProcessAssert:
        self._require(
            self._number_of_instances() == 0,
            "The process does have instances",
        )
        return self

    def has_instances(self, expected_number_of_instances: int) -> ProcessAssert:
        actual_number = self._number_of_instances()
        self._require(
            actual_number == expected_number_of_instances,
            numeric_mismatch(
                "number of instances", expected_number_of_instances, actual_number
            ),
        )
        return self
