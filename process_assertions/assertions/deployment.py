"""
Process Assertions - Deployment Assertions
==========================================
Root assertion for a deployment response. Navigates to the
processes contained in the deployment.
"""

from __future__ import annotations

from process_assertions.assertions.base import AbstractRecordAssert
from process_assertions.assertions.process import ProcessAssert
from process_assertions.records.source import RecordStreamSource
from process_assertions.responses import DeploymentEvent


class DeploymentAssert(AbstractRecordAssert):

    def __init__(
        self,
        actual: DeploymentEvent,
        record_stream_source: RecordStreamSource,
    ) -> None:
        super().__init__(actual, record_stream_source)

    def _bpmn_process_ids(self) -> list:
        return [p.bpmn_process_id for p in self.actual.processes]

    def _resource_names(self) -> list:
        return [p.resource_name for p in self.actual.processes]

    def contains_processes_by_bpmn_process_id(
        self, *expected_bpmn_process_ids: str
    ) -> DeploymentAssert:
        deployed = self._bpmn_process_ids()
        missing = [i for i in expected_bpmn_process_ids if i not in deployed]
        self._require(
            not missing,
            f"Expected deployment {self.actual.key} to contain processes with "
            f"BPMN process IDs {list(expected_bpmn_process_ids)} but it "
            f"contained {deployed}",
        )
        return self

    def contains_processes_by_resource_name(
        self, *expected_resource_names: str
    ) -> DeploymentAssert:
        deployed = self._resource_names()
        missing = [n for n in expected_resource_names if n not in deployed]
        self._require(
            not missing,
            f"Expected deployment {self.actual.key} to contain processes with "
            f"resource names {list(expected_resource_names)} but it "
            f"contained {deployed}",
        )
        return self

    def extracting_process_by_bpmn_process_id(
        self, bpmn_process_id: str
    ) -> ProcessAssert:
        matches = [
            p for p in self.actual.processes
            if p.bpmn_process_id == bpmn_process_id
        ]
        process = self._require_single(
            matches,
            f"Expected to find one process for BPMN process ID "
            f"'{bpmn_process_id}' but found {len(matches)}: "
            f"{[p.process_definition_key for p in matches]}",
        )
        return ProcessAssert(process, self.record_stream_source)

    def extracting_process_by_resource_name(self, resource_name: str) -> ProcessAssert:
        matches = [
            p for p in self.actual.processes
            if p.resource_name == resource_name
        ]
        process = self._require_single(
            matches,
            f"Expected to find one process for resource name "
            f"'{resource_name}' but found {len(matches)}: "
            f"{[p.process_definition_key for p in matches]}",
        )
        return ProcessAssert(process, self.record_stream_source)
