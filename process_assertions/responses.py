"""
Process Assertions - Engine Responses
=====================================
Read-only identifying values returned by the engine for a command.

The set of response kinds is CLOSED. Each kind maps to exactly one
root assertion (see process_assertions.assertions.entry).
Responses carry identifiers only; facts are always read from the
record stream.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, ClassVar, Dict, Optional, Tuple, Union


class ResponseKind(Enum):
    DEPLOYMENT = "DEPLOYMENT"
    PUBLISH_MESSAGE = "PUBLISH_MESSAGE"
    PROCESS_INSTANCE = "PROCESS_INSTANCE"
    ACTIVATED_JOB = "ACTIVATED_JOB"


# ══════════════════════════════════════════════════════════════
# DEPLOYMENT
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class ProcessMetadata:
    """One process definition contained in a deployment."""

    bpmn_process_id: str
    version: int
    process_definition_key: int
    resource_name: str


@dataclass(frozen=True)
class DeploymentEvent:
    key: int
    processes: Tuple[ProcessMetadata, ...] = ()

    kind: ClassVar[ResponseKind] = ResponseKind.DEPLOYMENT

    def __post_init__(self):
        object.__setattr__(self, "processes", tuple(self.processes))


# ══════════════════════════════════════════════════════════════
# MESSAGE
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class PublishMessageResponse:
    message_key: int

    kind: ClassVar[ResponseKind] = ResponseKind.PUBLISH_MESSAGE


# ══════════════════════════════════════════════════════════════
# PROCESS INSTANCE
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class ProcessInstanceEvent:
    process_instance_key: int
    bpmn_process_id: str = ""
    version: int = -1
    process_definition_key: int = -1

    kind: ClassVar[ResponseKind] = ResponseKind.PROCESS_INSTANCE


# ══════════════════════════════════════════════════════════════
# JOB
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class ActivatedJob:
    """A job handed to a worker by the engine."""

    key: int
    type: str
    process_instance_key: int
    bpmn_process_id: str
    element_id: str
    element_instance_key: int = -1
    process_definition_key: int = -1
    retries: int = 3
    worker: str = ""
    deadline: Optional[datetime] = None
    variables: Dict[str, Any] = field(default_factory=dict)

    kind: ClassVar[ResponseKind] = ResponseKind.ACTIVATED_JOB


EngineResponse = Union[
    DeploymentEvent,
    PublishMessageResponse,
    ProcessInstanceEvent,
    ActivatedJob,
]
