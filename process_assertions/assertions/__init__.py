"""
Process Assertions - Assertions Public API
==========================================
Chainable, stateful assertions over the live record stream.
"""

from process_assertions.assertions.base import (
    AbstractRecordAssert,
    numeric_mismatch,
    quoted_mismatch,
)
from process_assertions.assertions.context import (
    RecordStreamContext,
    get_record_stream_source,
    init_record_stream,
    reset_record_stream,
)
from process_assertions.assertions.deployment import DeploymentAssert
from process_assertions.assertions.entry import ASSERT_FACTORIES, assert_that
from process_assertions.assertions.errors import (
    AssertionSetupError,
    RecordStreamNotInitializedError,
    UnsupportedResponseError,
)
from process_assertions.assertions.incident import IncidentAssert
from process_assertions.assertions.job import JobAssert, job_from_record
from process_assertions.assertions.message import MessageAssert
from process_assertions.assertions.process import ProcessAssert
from process_assertions.assertions.process_instance import ProcessInstanceAssert

__all__ = [
    "assert_that",
    "ASSERT_FACTORIES",
    "AbstractRecordAssert",
    "DeploymentAssert",
    "ProcessAssert",
    "ProcessInstanceAssert",
    "MessageAssert",
    "JobAssert",
    "IncidentAssert",
    "job_from_record",
    "quoted_mismatch",
    "numeric_mismatch",
    "init_record_stream",
    "reset_record_stream",
    "get_record_stream_source",
    "RecordStreamContext",
    "AssertionSetupError",
    "UnsupportedResponseError",
    "RecordStreamNotInitializedError",
]
