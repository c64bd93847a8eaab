"""
Process Assertions Filters - Public API
=======================================
Immutable, category-scoped queries over a record stream.
"""

from process_assertions.filters.stream_filter import (
    FILTERS_BY_VALUE_TYPE,
    DeploymentRecordFilter,
    IncidentRecordFilter,
    JobRecordFilter,
    MessageRecordFilter,
    MessageSubscriptionRecordFilter,
    ProcessInstanceCreationRecordFilter,
    ProcessInstanceRecordFilter,
    ProcessMessageSubscriptionRecordFilter,
    ProcessRecordFilter,
    StreamFilter,
    VariableRecordFilter,
    deployment_records,
    filter_for,
    incident_records,
    job_records,
    message_records,
    process_instance_records,
    process_message_subscription_records,
    process_records,
    variable_records,
)

__all__ = [
    "StreamFilter",
    "FILTERS_BY_VALUE_TYPE",
    "DeploymentRecordFilter",
    "ProcessRecordFilter",
    "ProcessInstanceRecordFilter",
    "ProcessInstanceCreationRecordFilter",
    "JobRecordFilter",
    "MessageRecordFilter",
    "MessageSubscriptionRecordFilter",
    "ProcessMessageSubscriptionRecordFilter",
    "VariableRecordFilter",
    "IncidentRecordFilter",
    "filter_for",
    "deployment_records",
    "process_records",
    "process_instance_records",
    "job_records",
    "message_records",
    "process_message_subscription_records",
    "variable_records",
    "incident_records",
]
