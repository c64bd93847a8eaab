"""
Process Assertions - Process Instance Assertions
================================================
Checks on one process instance, identified by its process instance key.

State is derived from the instance's PROCESS_INSTANCE records:
    started     - process element ELEMENT_ACTIVATED
    completed   - process element ELEMENT_COMPLETED
    terminated  - process element ELEMENT_TERMINATED
    active      - started, neither completed nor terminated
    waiting at  - element whose latest lifecycle intent is ELEMENT_ACTIVATED
    passed      - element ELEMENT_COMPLETED (counted per occurrence)
"""

from __future__ import annotations

import json
from typing import Any, Dict, List

from process_assertions.assertions.base import AbstractRecordAssert
from process_assertions.assertions.incident import IncidentAssert
from process_assertions.filters.stream_filter import (
    IncidentRecordFilter,
    ProcessInstanceRecordFilter,
    incident_records,
    process_instance_records,
    process_message_subscription_records,
    variable_records,
)
from process_assertions.records.model import RejectionType
from process_assertions.records.source import RecordStreamSource
from process_assertions.records.value_types import (
    BpmnElementType,
    IncidentIntent,
    ProcessInstanceIntent,
    ProcessMessageSubscriptionIntent,
)

_LIFECYCLE_INTENTS = (
    ProcessInstanceIntent.ELEMENT_ACTIVATING,
    ProcessInstanceIntent.ELEMENT_ACTIVATED,
    ProcessInstanceIntent.ELEMENT_COMPLETING,
    ProcessInstanceIntent.ELEMENT_COMPLETED,
    ProcessInstanceIntent.ELEMENT_TERMINATING,
    ProcessInstanceIntent.ELEMENT_TERMINATED,
)


def _decode_variable(raw: Any) -> Any:
    """Variable values are exported as JSON text."""
    if not isinstance(raw, str):
        return raw
    try:
        return json.loads(raw)
    except ValueError:
        return raw


def _canonical_json(value: Any) -> str:
    # 1, 1.0 and true render differently, unlike Python equality
    return json.dumps(value, sort_keys=True)


class ProcessInstanceAssert(AbstractRecordAssert):

    def __init__(
        self,
        actual: int,
        record_stream_source: RecordStreamSource,
    ) -> None:
        super().__init__(actual, record_stream_source)

    @property
    def process_instance_key(self) -> int:
        return self.actual

    # ── Queries ───────────────────────────────────────────────

    def _instance_records(self) -> ProcessInstanceRecordFilter:
        return (
            process_instance_records(self.record_stream_source)
            .with_process_instance_key(self.process_instance_key)
            .with_rejection_type(RejectionType.NULL_VAL)
        )

    def _process_element_reached(self, intent: ProcessInstanceIntent) -> bool:
        return (
            self._instance_records()
            .with_bpmn_element_type(BpmnElementType.PROCESS)
            .with_intent(intent)
            .exists()
        )

    def _is_started(self) -> bool:
        return self._process_element_reached(ProcessInstanceIntent.ELEMENT_ACTIVATED)

    def _is_completed(self) -> bool:
        return self._process_element_reached(ProcessInstanceIntent.ELEMENT_COMPLETED)

    def _is_terminated(self) -> bool:
        return self._process_element_reached(ProcessInstanceIntent.ELEMENT_TERMINATED)

    def _times_passed(self, element_id: str) -> int:
        return (
            self._instance_records()
            .with_element_id(element_id)
            .with_intent(ProcessInstanceIntent.ELEMENT_COMPLETED)
            .count()
        )

    def _waiting_element_ids(self) -> List[str]:
        latest: Dict[int, Any] = {}
        for record in self._instance_records().with_intent(*_LIFECYCLE_INTENTS).stream():
            if record.get("bpmn_element_type") == BpmnElementType.PROCESS:
                continue
            latest[record.key] = record

        return [
            r.get("element_id") for r in latest.values()
            if r.intent == ProcessInstanceIntent.ELEMENT_ACTIVATED
        ]

    def _latest_variables(self) -> Dict[str, Any]:
        variables: Dict[str, Any] = {}
        for record in (
            variable_records(self.record_stream_source)
            .with_process_instance_key(self.process_instance_key)
            .with_rejection_type(RejectionType.NULL_VAL)
            .stream()
        ):
            variables[record.get("name")] = record.get("value")
        return variables

    def _incidents(self) -> IncidentRecordFilter:
        return (
            incident_records(self.record_stream_source)
            .with_process_instance_key(self.process_instance_key)
            .with_rejection_type(RejectionType.NULL_VAL)
            .with_intent(IncidentIntent.CREATED)
        )

    # ── Lifecycle ─────────────────────────────────────────────

    def is_started(self) -> ProcessInstanceAssert:
        self._require(
            self._is_started(),
            f"Process with key {self.process_instance_key} was not started",
        )
        return self

    def is_active(self) -> ProcessInstanceAssert:
        active = (
            self._is_started()
            and not self._is_completed()
            and not self._is_terminated()
        )
        self._require(
            active,
            f"Process with key {self.process_instance_key} is not active",
        )
        return self

    def is_completed(self) -> ProcessInstanceAssert:
        self._require(
            self._is_completed(),
            f"Process with key {self.process_instance_key} was not completed",
        )
        return self

    def is_not_completed(self) -> ProcessInstanceAssert:
        self._require(
            not self._is_completed(),
            f"Process with key {self.process_instance_key} was completed",
        )
        return self

    def is_terminated(self) -> ProcessInstanceAssert:
        self._require(
            self._is_terminated(),
            f"Process with key {self.process_instance_key} was not terminated",
        )
        return self

    def is_not_terminated(self) -> ProcessInstanceAssert:
        self._require(
            not self._is_terminated(),
            f"Process with key {self.process_instance_key} was terminated",
        )
        return self

    # ── Elements ──────────────────────────────────────────────

    def has_passed_element(self, element_id: str, times: int = 1) -> ProcessInstanceAssert:
        actual_times = self._times_passed(element_id)
        self._require(
            actual_times == times,
            f"Expected element with id {element_id} to be passed {times} times, "
            f"but was {actual_times}",
        )
        return self

    def has_not_passed_element(self, element_id: str) -> ProcessInstanceAssert:
        actual_times = self._times_passed(element_id)
        self._require(
            actual_times == 0,
            f"Expected element with id {element_id} to not be passed, "
            f"but was passed {actual_times} times",
        )
        return self

    def has_passed_elements_in_order(self, *element_ids: str) -> ProcessInstanceAssert:
        expected = list(element_ids)
        passed = [
            r.get("element_id")
            for r in (
                self._instance_records()
                .with_intent(ProcessInstanceIntent.ELEMENT_COMPLETED)
                .stream()
            )
            if r.get("element_id") in element_ids
        ]
        self._require(
            passed == expected,
            f"Expected elements to be passed in order {expected} but was {passed}",
        )
        return self

    def is_waiting_at_elements(self, *element_ids: str) -> ProcessInstanceAssert:
        waiting = self._waiting_element_ids()
        missing = [e for e in element_ids if e not in waiting]
        self._require(
            not missing,
            f"Process with key {self.process_instance_key} is not waiting at "
            f"element(s) with id(s) {missing}. Waiting at: {waiting}",
        )
        return self

    def is_not_waiting_at_elements(self, *element_ids: str) -> ProcessInstanceAssert:
        waiting = self._waiting_element_ids()
        present = [e for e in element_ids if e in waiting]
        self._require(
            not present,
            f"Process with key {self.process_instance_key} is waiting at "
            f"element(s) with id(s) {present}",
        )
        return self

    # ── Variables ─────────────────────────────────────────────

    def has_variable(self, name: str) -> ProcessInstanceAssert:
        variables = self._latest_variables()
        self._require(
            name in variables,
            f"Process with key {self.process_instance_key} does not contain "
            f"variable with name '{name}'. Available variables are: "
            f"{sorted(variables)}",
        )
        return self

    def has_variable_with_value(self, name: str, value: Any) -> ProcessInstanceAssert:
        self.has_variable(name)
        raw = self._latest_variables()[name]
        self._require(
            _canonical_json(_decode_variable(raw)) == _canonical_json(value),
            f"Expected variable '{name}' of process with key "
            f"{self.process_instance_key} to be {json.dumps(value)} "
            f"but was {raw} instead",
        )
        return self

    # ── Messages ──────────────────────────────────────────────

    def has_correlated_message_by_name(
        self, message_name: str, times: int
    ) -> ProcessInstanceAssert:
        actual_times = (
            process_message_subscription_records(self.record_stream_source)
            .with_process_instance_key(self.process_instance_key)
            .with_message_name(message_name)
            .with_rejection_type(RejectionType.NULL_VAL)
            .with_intent(ProcessMessageSubscriptionIntent.CORRELATED)
            .count()
        )
        self._require(
            actual_times == times,
            f"Expected message with name '{message_name}' to be correlated "
            f"{times} times, but was {actual_times} times",
        )
        return self

    # ── Incidents ─────────────────────────────────────────────

    def has_any_incidents(self) -> ProcessInstanceAssert:
        self._require(
            self._incidents().exists(),
            "No incidents were raised for this process instance",
        )
        return self

    def has_no_incidents(self) -> ProcessInstanceAssert:
        self._require(
            not self._incidents().exists(),
            "Incidents were raised for this process instance",
        )
        return self

    def extracting_latest_incident(self) -> IncidentAssert:
        self.has_any_incidents()
        latest = self._incidents().last()
        return IncidentAssert(latest.key, self.record_stream_source)
