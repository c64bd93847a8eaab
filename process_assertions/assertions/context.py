"""
Process Assertions - Record Stream Context
==========================================
Thread-local default record stream source.

Test lifecycle glue (a fixture, a test base class) initializes the
source once per test; assert_that() falls back to it when no source
is passed explicitly. Each thread sees only its own source.
"""

import logging
import threading

from process_assertions.assertions.errors import RecordStreamNotInitializedError
from process_assertions.records.source import RecordStreamSource

logger = logging.getLogger("process_assertions.assertions")

_record_stream_state = threading.local()


def init_record_stream(record_stream_source: RecordStreamSource) -> None:
    """Set the default record stream source for the current thread."""
    _record_stream_state.source = record_stream_source
    logger.debug("Record stream source initialized for current thread.")


def reset_record_stream() -> None:
    """Forget the current thread's default record stream source."""
    _record_stream_state.source = None


def get_record_stream_source() -> RecordStreamSource:
    """
    Return the current thread's default record stream source.

    Raises RecordStreamNotInitializedError if none was set.
    """
    source = getattr(_record_stream_state, "source", None)
    if source is None:
        raise RecordStreamNotInitializedError()
    return source


class RecordStreamContext:
    """
    Context manager that installs a default record stream source.

    Usage:
        with RecordStreamContext(stream):
            assert_that(deployment).extracting_process_by_bpmn_process_id("p")

    The previous source (if any) is restored on exit.
    """

    def __init__(self, record_stream_source: RecordStreamSource) -> None:
        self._source = record_stream_source
        self._previous = None

    def __enter__(self):
        self._previous = getattr(_record_stream_state, "source", None)
        init_record_stream(self._source)
        return self._source

    def __exit__(self, exc_type, exc_val, exc_tb):
        _record_stream_state.source = self._previous
        return False
