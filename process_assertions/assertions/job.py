"""
Process Assertions - Job Assertions
===================================
Checks on one activated job. Identifying fields come from the
ActivatedJob response; incidents are read from the record stream.
"""

from __future__ import annotations

from process_assertions.assertions.base import (
    AbstractRecordAssert,
    numeric_mismatch,
    quoted_mismatch,
)
from process_assertions.assertions.incident import IncidentAssert
from process_assertions.assertions.process_instance import ProcessInstanceAssert
from process_assertions.filters.stream_filter import (
    IncidentRecordFilter,
    incident_records,
)
from process_assertions.records.model import UNSET_KEY, Record, RejectionType
from process_assertions.records.source import RecordStreamSource
from process_assertions.records.value_types import IncidentIntent
from process_assertions.responses import ActivatedJob


def job_from_record(record: Record) -> ActivatedJob:
    """Rebuild the ActivatedJob view of a JOB record."""
    return ActivatedJob(
        key=record.key,
        type=record.get("type", ""),
        process_instance_key=record.get("process_instance_key", UNSET_KEY),
        bpmn_process_id=record.get("bpmn_process_id", ""),
        element_id=record.get("element_id", ""),
        element_instance_key=record.get("element_instance_key", UNSET_KEY),
        process_definition_key=record.get("process_definition_key", UNSET_KEY),
        retries=record.get("retries", 0),
        worker=record.get("worker", ""),
        variables=dict(record.get("variables") or {}),
    )


class JobAssert(AbstractRecordAssert):

    def __init__(
        self,
        actual: ActivatedJob,
        record_stream_source: RecordStreamSource,
    ) -> None:
        super().__init__(actual, record_stream_source)

    def _incidents(self) -> IncidentRecordFilter:
        return (
            incident_records(self.record_stream_source)
            .with_job_key(self.actual.key)
            .with_rejection_type(RejectionType.NULL_VAL)
            .with_intent(IncidentIntent.CREATED)
        )

    def has_element_id(self, expected_element_id: str) -> JobAssert:
        self._require(
            self.actual.element_id == expected_element_id,
            quoted_mismatch("element ID", expected_element_id, self.actual.element_id),
        )
        return self

    def has_bpmn_process_id(self, expected_bpmn_process_id: str) -> JobAssert:
        self._require(
            self.actual.bpmn_process_id == expected_bpmn_process_id,
            quoted_mismatch(
                "BPMN process ID", expected_bpmn_process_id, self.actual.bpmn_process_id
            ),
        )
        return self

    def has_retries(self, expected_retries: int) -> JobAssert:
        self._require(
            self.actual.retries == expected_retries,
            numeric_mismatch("retries", expected_retries, self.actual.retries),
        )
        return self

    def has_any_incidents(self) -> JobAssert:
        self._require(
            self._incidents().exists(),
            "No incidents were raised for this job",
        )
        return self

    def has_no_incidents(self) -> JobAssert:
        self._require(
            not self._incidents().exists(),
            "Incidents were raised for this job",
        )
        return self

    def extracting_latest_incident(self) -> IncidentAssert:
        self.has_any_incidents()
        latest = self._incidents().last()
        return IncidentAssert(latest.key, self.record_stream_source)

    def extracting_process_instance(self) -> ProcessInstanceAssert:
        return ProcessInstanceAssert(
            self.actual.process_instance_key, self.record_stream_source
        )
