"""
Process Assertions - Incident Assertions
========================================
Checks on one incident, identified by its incident key.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from process_assertions.assertions.base import AbstractRecordAssert, quoted_mismatch
from process_assertions.filters.stream_filter import incident_records, job_records
from process_assertions.records.model import UNSET_KEY, Record, RejectionType
from process_assertions.records.source import RecordStreamSource
from process_assertions.records.value_types import IncidentIntent

if TYPE_CHECKING:
    from process_assertions.assertions.job import JobAssert
    from process_assertions.assertions.process_instance import ProcessInstanceAssert


class IncidentAssert(AbstractRecordAssert):

    def __init__(self, actual: int, record_stream_source: RecordStreamSource) -> None:
        super().__init__(actual, record_stream_source)

    @property
    def incident_key(self) -> int:
        return self.actual

    def _created_record(self) -> Record:
        matches = (
            incident_records(self.record_stream_source)
            .with_key(self.incident_key)
            .with_rejection_type(RejectionType.NULL_VAL)
            .with_intent(IncidentIntent.CREATED)
            .to_list()
        )
        return self._require_single(
            matches,
            f"Expected to find one incident with key {self.incident_key} "
            f"but found {len(matches)}",
        )

    def _is_resolved(self) -> bool:
        return (
            incident_records(self.record_stream_source)
            .with_key(self.incident_key)
            .with_rejection_type(RejectionType.NULL_VAL)
            .with_intent(IncidentIntent.RESOLVED)
            .exists()
        )

    def has_error_type(self, expected_error_type: str) -> IncidentAssert:
        actual_type = self._created_record().get("error_type")
        self._require(
            actual_type == expected_error_type,
            quoted_mismatch("error type", expected_error_type, actual_type),
        )
        return self

    def has_error_message(self, expected_error_message: str) -> IncidentAssert:
        actual_message = self._created_record().get("error_message")
        self._require(
            actual_message == expected_error_message,
            quoted_mismatch("error message", expected_error_message, actual_message),
        )
        return self

    def was_raised_in_element(self, expected_element_id: str) -> IncidentAssert:
        actual_element = self._created_record().get("element_id")
        self._require(
            actual_element == expected_element_id,
            quoted_mismatch("element ID", expected_element_id, actual_element),
        )
        return self

    def is_resolved(self) -> IncidentAssert:
        self._require(
            self._is_resolved(),
            f"Incident with key {self.incident_key} was not resolved",
        )
        return self

    def is_unresolved(self) -> IncidentAssert:
        self._require(
            not self._is_resolved(),
            f"Incident with key {self.incident_key} was resolved",
        )
        return self

    def extracting_process_instance(self) -> ProcessInstanceAssert:
        from process_assertions.assertions.process_instance import ProcessInstanceAssert

        process_instance_key = self._created_record().get("process_instance_key")
        return ProcessInstanceAssert(process_instance_key, self.record_stream_source)

    def extracting_job(self) -> JobAssert:
        """Hand off to the job that raised this incident."""
        from process_assertions.assertions.job import JobAssert, job_from_record

        job_key = self._created_record().get("job_key", UNSET_KEY)
        if job_key is None or job_key <= 0:
            self._fail(f"Incident with key {self.incident_key} was not raised by a job")

        job_record = (
            job_records(self.record_stream_source)
            .with_key(job_key)
            .with_rejection_type(RejectionType.NULL_VAL)
            .last()
        )
        if job_record is None:
            self._fail(
                f"Expected to find job with key {job_key} for incident "
                f"{self.incident_key} but found none"
            )
        return JobAssert(job_from_record(job_record), self.record_stream_source)
