"""
Process Assertions Records - Value Types and Intents
====================================================
Closed catalog of record categories and the intents scoped to each.

Rules:
- Every value type owns exactly one intent enum
- An intent is only meaningful together with its value type
- Adding a category means adding a ValueType member AND its intent enum
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, Type


# ══════════════════════════════════════════════════════════════
# VALUE TYPE (record category)
# ══════════════════════════════════════════════════════════════

class ValueType(Enum):
    DEPLOYMENT = "DEPLOYMENT"
    PROCESS = "PROCESS"
    PROCESS_INSTANCE = "PROCESS_INSTANCE"
    PROCESS_INSTANCE_CREATION = "PROCESS_INSTANCE_CREATION"
    JOB = "JOB"
    MESSAGE = "MESSAGE"
    MESSAGE_SUBSCRIPTION = "MESSAGE_SUBSCRIPTION"
    PROCESS_MESSAGE_SUBSCRIPTION = "PROCESS_MESSAGE_SUBSCRIPTION"
    VARIABLE = "VARIABLE"
    INCIDENT = "INCIDENT"


# ══════════════════════════════════════════════════════════════
# INTENTS (one enum per value type)
# ══════════════════════════════════════════════════════════════

class DeploymentIntent(Enum):
    CREATE = "CREATE"
    CREATED = "CREATED"
    DISTRIBUTED = "DISTRIBUTED"
    FULLY_DISTRIBUTED = "FULLY_DISTRIBUTED"


class ProcessIntent(Enum):
    CREATED = "CREATED"
    DELETED = "DELETED"


class ProcessInstanceIntent(Enum):
    # commands
    CANCEL = "CANCEL"
    ACTIVATE_ELEMENT = "ACTIVATE_ELEMENT"
    COMPLETE_ELEMENT = "COMPLETE_ELEMENT"
    TERMINATE_ELEMENT = "TERMINATE_ELEMENT"
    # events
    SEQUENCE_FLOW_TAKEN = "SEQUENCE_FLOW_TAKEN"
    ELEMENT_ACTIVATING = "ELEMENT_ACTIVATING"
    ELEMENT_ACTIVATED = "ELEMENT_ACTIVATED"
    ELEMENT_COMPLETING = "ELEMENT_COMPLETING"
    ELEMENT_COMPLETED = "ELEMENT_COMPLETED"
    ELEMENT_TERMINATING = "ELEMENT_TERMINATING"
    ELEMENT_TERMINATED = "ELEMENT_TERMINATED"


class ProcessInstanceCreationIntent(Enum):
    CREATE = "CREATE"
    CREATED = "CREATED"


class JobIntent(Enum):
    CREATED = "CREATED"
    COMPLETE = "COMPLETE"
    COMPLETED = "COMPLETED"
    TIME_OUT = "TIME_OUT"
    TIMED_OUT = "TIMED_OUT"
    FAIL = "FAIL"
    FAILED = "FAILED"
    UPDATE_RETRIES = "UPDATE_RETRIES"
    RETRIES_UPDATED = "RETRIES_UPDATED"
    CANCELED = "CANCELED"
    THROW_ERROR = "THROW_ERROR"
    ERROR_THROWN = "ERROR_THROWN"


class MessageIntent(Enum):
    PUBLISH = "PUBLISH"
    PUBLISHED = "PUBLISHED"
    EXPIRE = "EXPIRE"
    EXPIRED = "EXPIRED"


class MessageSubscriptionIntent(Enum):
    CREATED = "CREATED"
    CORRELATING = "CORRELATING"
    CORRELATE = "CORRELATE"
    CORRELATED = "CORRELATED"
    REJECT = "REJECT"
    REJECTED = "REJECTED"
    DELETED = "DELETED"


class ProcessMessageSubscriptionIntent(Enum):
    CREATING = "CREATING"
    CREATE = "CREATE"
    CREATED = "CREATED"
    CORRELATE = "CORRELATE"
    CORRELATED = "CORRELATED"
    DELETING = "DELETING"
    DELETE = "DELETE"
    DELETED = "DELETED"


class VariableIntent(Enum):
    CREATED = "CREATED"
    UPDATED = "UPDATED"


class IncidentIntent(Enum):
    CREATED = "CREATED"
    RESOLVE = "RESOLVE"
    RESOLVED = "RESOLVED"


INTENTS_BY_VALUE_TYPE: Dict[ValueType, Type[Enum]] = {
    ValueType.DEPLOYMENT: DeploymentIntent,
    ValueType.PROCESS: ProcessIntent,
    ValueType.PROCESS_INSTANCE: ProcessInstanceIntent,
    ValueType.PROCESS_INSTANCE_CREATION: ProcessInstanceCreationIntent,
    ValueType.JOB: JobIntent,
    ValueType.MESSAGE: MessageIntent,
    ValueType.MESSAGE_SUBSCRIPTION: MessageSubscriptionIntent,
    ValueType.PROCESS_MESSAGE_SUBSCRIPTION: ProcessMessageSubscriptionIntent,
    ValueType.VARIABLE: VariableIntent,
    ValueType.INCIDENT: IncidentIntent,
}


def intent_type_for(value_type: ValueType) -> Type[Enum]:
    """Return the intent enum bound to a value type."""
    return INTENTS_BY_VALUE_TYPE[value_type]


def resolve_intent(value_type: ValueType, name: str) -> Enum:
    """
    Look up an intent by name within its value type.

    Raises KeyError if the name is not an intent of that value type.
    """
    return intent_type_for(value_type)[name]


# ══════════════════════════════════════════════════════════════
# BPMN ELEMENT TYPES (value of ProcessInstance.bpmn_element_type)
# ══════════════════════════════════════════════════════════════

class BpmnElementType:
    """Known element type tags. Stored as plain strings in record values."""

    PROCESS = "PROCESS"
    SUB_PROCESS = "SUB_PROCESS"
    START_EVENT = "START_EVENT"
    END_EVENT = "END_EVENT"
    SERVICE_TASK = "SERVICE_TASK"
    RECEIVE_TASK = "RECEIVE_TASK"
    USER_TASK = "USER_TASK"
    EXCLUSIVE_GATEWAY = "EXCLUSIVE_GATEWAY"
    PARALLEL_GATEWAY = "PARALLEL_GATEWAY"
    INTERMEDIATE_CATCH_EVENT = "INTERMEDIATE_CATCH_EVENT"
    BOUNDARY_EVENT = "BOUNDARY_EVENT"
    SEQUENCE_FLOW = "SEQUENCE_FLOW"
    CALL_ACTIVITY = "CALL_ACTIVITY"
