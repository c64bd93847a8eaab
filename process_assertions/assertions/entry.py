"""
Process Assertions - Entry Point
================================
assert_that(response, record_stream_source) builds the root assertion
for an engine response.

Dispatch is a fixed table keyed by ResponseKind. No reflection, no
string-based imports. An object without a known kind is refused
immediately with UnsupportedResponseError.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, Optional

from process_assertions.assertions.base import AbstractRecordAssert
from process_assertions.assertions.context import get_record_stream_source
from process_assertions.assertions.deployment import DeploymentAssert
from process_assertions.assertions.errors import UnsupportedResponseError
from process_assertions.assertions.job import JobAssert
from process_assertions.assertions.message import MessageAssert
from process_assertions.assertions.process_instance import ProcessInstanceAssert
from process_assertions.records.source import RecordStreamSource
from process_assertions.responses import ResponseKind

logger = logging.getLogger("process_assertions.assertions")


def _deployment_assert(response, source: RecordStreamSource) -> DeploymentAssert:
    return DeploymentAssert(response, source)


def _message_assert(response, source: RecordStreamSource) -> MessageAssert:
    return MessageAssert(response, source)


def _process_instance_assert(response, source: RecordStreamSource) -> ProcessInstanceAssert:
    return ProcessInstanceAssert(response.process_instance_key, source)


def _job_assert(response, source: RecordStreamSource) -> JobAssert:
    return JobAssert(response, source)


ASSERT_FACTORIES: Dict[
    ResponseKind, Callable[[object, RecordStreamSource], AbstractRecordAssert]
] = {
    ResponseKind.DEPLOYMENT: _deployment_assert,
    ResponseKind.PUBLISH_MESSAGE: _message_assert,
    ResponseKind.PROCESS_INSTANCE: _process_instance_assert,
    ResponseKind.ACTIVATED_JOB: _job_assert,
}


def assert_that(
    response,
    record_stream_source: Optional[RecordStreamSource] = None,
):
    """
    Build the root assertion for an engine response.

    Args:
        response:             DeploymentEvent, PublishMessageResponse,
                              ProcessInstanceEvent or ActivatedJob.
        record_stream_source: Live record source. Defaults to the source
                              installed with init_record_stream().

    Raises:
        UnsupportedResponseError:        response has no matching assertion.
        RecordStreamNotInitializedError: no source passed or initialized.
    """
    kind = getattr(response, "kind", None)
    factory = ASSERT_FACTORIES.get(kind) if isinstance(kind, ResponseKind) else None
    if factory is None:
        raise UnsupportedResponseError(response)

    if record_stream_source is None:
        record_stream_source = get_record_stream_source()

    logger.debug(f"Building {kind.value} assertion for {response!r}")
    return factory(response, record_stream_source)
