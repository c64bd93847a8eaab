"""
Shared fixtures: an in-memory record stream and a fake engine that
writes realistic record sequences into it.
"""

from __future__ import annotations

import json
from typing import Any, Dict, Optional

import pytest

from process_assertions.assertions.context import reset_record_stream
from process_assertions.records.model import (
    UNSET_KEY,
    Record,
    RecordType,
    RejectionType,
)
from process_assertions.records.source import InMemoryRecordStream
from process_assertions.records.value_types import (
    BpmnElementType,
    DeploymentIntent,
    IncidentIntent,
    JobIntent,
    MessageIntent,
    ProcessInstanceCreationIntent,
    ProcessInstanceIntent,
    ProcessIntent,
    ProcessMessageSubscriptionIntent,
    ValueType,
    VariableIntent,
)
from process_assertions.responses import (
    ActivatedJob,
    DeploymentEvent,
    ProcessInstanceEvent,
    ProcessMetadata,
    PublishMessageResponse,
)

FIRST_KEY = 2251799813685249


class FakeEngine:
    """
    Writes the records a real engine would emit for common commands.

    Only the record shapes matter here; no BPMN is executed.
    """

    def __init__(self, stream: InMemoryRecordStream) -> None:
        self.stream = stream
        self._position = 0
        self._next_key = FIRST_KEY
        self._versions: Dict[str, int] = {}
        self._definitions: Dict[str, ProcessMetadata] = {}
        self._instances: Dict[int, ProcessMetadata] = {}
        self._elements: Dict[int, Dict[str, Any]] = {}
        self._variables: Dict[int, set] = {}

    # ── Low level ─────────────────────────────────────────────

    def new_key(self) -> int:
        key = self._next_key
        self._next_key += 1
        return key

    def emit(
        self,
        value_type: ValueType,
        intent,
        *,
        key: int = UNSET_KEY,
        value: Optional[dict] = None,
        record_type: RecordType = RecordType.EVENT,
        rejection_type: RejectionType = RejectionType.NULL_VAL,
        rejection_reason: str = "",
    ) -> Record:
        self._position += 1
        record = Record(
            position=self._position,
            key=key,
            value_type=value_type,
            intent=intent,
            record_type=record_type,
            rejection_type=rejection_type,
            rejection_reason=rejection_reason,
            value=value or {},
        )
        self.stream.append(record)
        return record

    def reject(self, value_type: ValueType, intent, *, key: int = UNSET_KEY,
               value: Optional[dict] = None,
               rejection_type: RejectionType = RejectionType.INVALID_STATE,
               reason: str = "rejected") -> Record:
        return self.emit(
            value_type,
            intent,
            key=key,
            value=value,
            record_type=RecordType.COMMAND_REJECTION,
            rejection_type=rejection_type,
            rejection_reason=reason,
        )

    # ── Deployment ────────────────────────────────────────────

    def deploy_process(self, resource_name: str, bpmn_process_id: str) -> DeploymentEvent:
        version = self._versions.get(bpmn_process_id, 0) + 1
        self._versions[bpmn_process_id] = version

        self.emit(
            ValueType.DEPLOYMENT,
            DeploymentIntent.CREATE,
            record_type=RecordType.COMMAND,
            value={"resources": [resource_name]},
        )
        metadata = ProcessMetadata(
            bpmn_process_id=bpmn_process_id,
            version=version,
            process_definition_key=self.new_key(),
            resource_name=resource_name,
        )
        self.emit(
            ValueType.PROCESS,
            ProcessIntent.CREATED,
            key=metadata.process_definition_key,
            value={
                "bpmn_process_id": bpmn_process_id,
                "version": version,
                "process_definition_key": metadata.process_definition_key,
                "resource_name": resource_name,
            },
        )
        deployment_key = self.new_key()
        self.emit(
            ValueType.DEPLOYMENT,
            DeploymentIntent.CREATED,
            key=deployment_key,
            value={"resources": [resource_name]},
        )
        self._definitions[bpmn_process_id] = metadata
        return DeploymentEvent(key=deployment_key, processes=(metadata,))

    # ── Process instances ─────────────────────────────────────

    def _element_value(self, process_instance_key: int, element_id: str,
                       element_type: str) -> dict:
        metadata = self._instances[process_instance_key]
        return {
            "bpmn_process_id": metadata.bpmn_process_id,
            "version": metadata.version,
            "process_definition_key": metadata.process_definition_key,
            "process_instance_key": process_instance_key,
            "element_id": element_id,
            "bpmn_element_type": element_type,
            "flow_scope_key": (
                UNSET_KEY if element_type == BpmnElementType.PROCESS
                else process_instance_key
            ),
        }

    def _lifecycle(self, element_key: int, *intents: ProcessInstanceIntent) -> None:
        element = self._elements[element_key]
        for intent in intents:
            self.emit(
                ValueType.PROCESS_INSTANCE,
                intent,
                key=element_key,
                value=element["value"],
            )

    def start_process_instance(
        self,
        bpmn_process_id: str,
        variables: Optional[dict] = None,
    ) -> ProcessInstanceEvent:
        metadata = self._definitions[bpmn_process_id]
        self.emit(
            ValueType.PROCESS_INSTANCE_CREATION,
            ProcessInstanceCreationIntent.CREATE,
            record_type=RecordType.COMMAND,
            value={"bpmn_process_id": bpmn_process_id},
        )

        process_instance_key = self.new_key()
        self._instances[process_instance_key] = metadata
        self._elements[process_instance_key] = {
            "value": self._element_value(
                process_instance_key, bpmn_process_id, BpmnElementType.PROCESS
            ),
        }
        self._lifecycle(
            process_instance_key,
            ProcessInstanceIntent.ELEMENT_ACTIVATING,
            ProcessInstanceIntent.ELEMENT_ACTIVATED,
        )
        self.emit(
            ValueType.PROCESS_INSTANCE_CREATION,
            ProcessInstanceCreationIntent.CREATED,
            key=self.new_key(),
            value={
                "bpmn_process_id": bpmn_process_id,
                "version": metadata.version,
                "process_definition_key": metadata.process_definition_key,
                "process_instance_key": process_instance_key,
            },
        )
        for name, item in (variables or {}).items():
            self.set_variable(process_instance_key, name, item)

        self.pass_element(process_instance_key, "start", BpmnElementType.START_EVENT)
        return ProcessInstanceEvent(
            process_instance_key=process_instance_key,
            bpmn_process_id=bpmn_process_id,
            version=metadata.version,
            process_definition_key=metadata.process_definition_key,
        )

    def activate_element(self, process_instance_key: int, element_id: str,
                         element_type: str = BpmnElementType.SERVICE_TASK) -> int:
        element_key = self.new_key()
        self._elements[element_key] = {
            "value": self._element_value(process_instance_key, element_id, element_type),
        }
        self._lifecycle(
            element_key,
            ProcessInstanceIntent.ELEMENT_ACTIVATING,
            ProcessInstanceIntent.ELEMENT_ACTIVATED,
        )
        return element_key

    def complete_element(self, element_key: int) -> None:
        self._lifecycle(
            element_key,
            ProcessInstanceIntent.ELEMENT_COMPLETING,
            ProcessInstanceIntent.ELEMENT_COMPLETED,
        )

    def terminate_element(self, element_key: int) -> None:
        self._lifecycle(
            element_key,
            ProcessInstanceIntent.ELEMENT_TERMINATING,
            ProcessInstanceIntent.ELEMENT_TERMINATED,
        )

    def pass_element(self, process_instance_key: int, element_id: str,
                     element_type: str = BpmnElementType.SERVICE_TASK) -> int:
        element_key = self.activate_element(process_instance_key, element_id, element_type)
        self.complete_element(element_key)
        return element_key

    def complete_process_instance(self, process_instance_key: int) -> None:
        self.complete_element(process_instance_key)

    def cancel_process_instance(self, process_instance_key: int) -> None:
        self.terminate_element(process_instance_key)

    # ── Variables ─────────────────────────────────────────────

    def set_variable(self, process_instance_key: int, name: str, item: Any) -> Record:
        known = self._variables.setdefault(process_instance_key, set())
        intent = VariableIntent.UPDATED if name in known else VariableIntent.CREATED
        known.add(name)
        metadata = self._instances[process_instance_key]
        return self.emit(
            ValueType.VARIABLE,
            intent,
            key=self.new_key(),
            value={
                "name": name,
                "value": json.dumps(item),
                "scope_key": process_instance_key,
                "process_instance_key": process_instance_key,
                "process_definition_key": metadata.process_definition_key,
            },
        )

    # ── Jobs and incidents ────────────────────────────────────

    def create_job(self, process_instance_key: int, element_key: int,
                   job_type: str = "test", retries: int = 3) -> ActivatedJob:
        element = self._elements[element_key]["value"]
        job = ActivatedJob(
            key=self.new_key(),
            type=job_type,
            process_instance_key=process_instance_key,
            bpmn_process_id=element["bpmn_process_id"],
            element_id=element["element_id"],
            element_instance_key=element_key,
            process_definition_key=element["process_definition_key"],
            retries=retries,
        )
        self.emit(
            ValueType.JOB,
            JobIntent.CREATED,
            key=job.key,
            value={
                "type": job_type,
                "process_instance_key": process_instance_key,
                "bpmn_process_id": job.bpmn_process_id,
                "process_definition_key": job.process_definition_key,
                "element_id": job.element_id,
                "element_instance_key": element_key,
                "retries": retries,
            },
        )
        return job

    def raise_incident(self, process_instance_key: int, element_id: str,
                       error_type: str = "JOB_NO_RETRIES",
                       error_message: str = "No more retries left.",
                       job_key: int = UNSET_KEY) -> int:
        incident_key = self.new_key()
        self.emit(
            ValueType.INCIDENT,
            IncidentIntent.CREATED,
            key=incident_key,
            value={
                "error_type": error_type,
                "error_message": error_message,
                "bpmn_process_id": self._instances[process_instance_key].bpmn_process_id,
                "process_instance_key": process_instance_key,
                "element_id": element_id,
                "job_key": job_key,
            },
        )
        return incident_key

    def resolve_incident(self, incident_key: int) -> None:
        self.emit(ValueType.INCIDENT, IncidentIntent.RESOLVED, key=incident_key)

    # ── Messages ──────────────────────────────────────────────

    def publish_message(self, name: str, correlation_key: str,
                        time_to_live: int = 60000) -> PublishMessageResponse:
        value = {
            "name": name,
            "correlation_key": correlation_key,
            "time_to_live": time_to_live,
            "message_id": "",
            "variables": {},
        }
        self.emit(
            ValueType.MESSAGE,
            MessageIntent.PUBLISH,
            record_type=RecordType.COMMAND,
            value=value,
        )
        message_key = self.new_key()
        self.emit(ValueType.MESSAGE, MessageIntent.PUBLISHED, key=message_key, value=value)
        return PublishMessageResponse(message_key=message_key)

    def correlate_message(self, message_key: int, process_instance_key: int,
                          message_name: str, element_id: str = "receive") -> Record:
        return self.emit(
            ValueType.PROCESS_MESSAGE_SUBSCRIPTION,
            ProcessMessageSubscriptionIntent.CORRELATED,
            key=self.new_key(),
            value={
                "message_key": message_key,
                "message_name": message_name,
                "process_instance_key": process_instance_key,
                "bpmn_process_id": self._instances[process_instance_key].bpmn_process_id,
                "element_id": element_id,
            },
        )

    def expire_message(self, message_key: int) -> Record:
        return self.emit(ValueType.MESSAGE, MessageIntent.EXPIRED, key=message_key)


@pytest.fixture
def record_stream() -> InMemoryRecordStream:
    return InMemoryRecordStream()


@pytest.fixture
def engine(record_stream) -> FakeEngine:
    return FakeEngine(record_stream)


@pytest.fixture(autouse=True)
def _clear_default_record_stream():
    yield
    reset_record_stream()
