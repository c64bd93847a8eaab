"""
Process Assertions - Assertion Base
===================================
Shared behaviour of every entity assertion.

Rules:
- An assertion holds the subject's identifiers and a SHARED source
- It never closes, caches from, or writes to the source
- Every verification re-queries the source at call time
- Failures raise AssertionError synchronously, never retried
- Verifications return self so checks can be chained
"""

from __future__ import annotations

import logging
from typing import Any, List, NoReturn, TypeVar

from process_assertions.assertions.errors import AssertionSetupError
from process_assertions.records.source import RecordStreamSource

logger = logging.getLogger("process_assertions.assertions")

T = TypeVar("T")


# ══════════════════════════════════════════════════════════════
# FAILURE MESSAGES
# ══════════════════════════════════════════════════════════════

def quoted_mismatch(field_name: str, expected: Any, actual: Any) -> str:
    """Mismatch message for string fields."""
    return (
        f"Expected {field_name} to be '{expected}' "
        f"but was '{actual}' instead."
    )


def numeric_mismatch(field_name: str, expected: Any, actual: Any) -> str:
    """Mismatch message for numeric fields. No quotes, no full stop."""
    return f"Expected {field_name} to be {expected} but was {actual} instead"


# ══════════════════════════════════════════════════════════════
# ABSTRACT RECORD ASSERT
# ══════════════════════════════════════════════════════════════

class AbstractRecordAssert:
    """
    Base class for assertions over one engine entity.

    Attributes:
        actual:               Identifier(s) of the subject entity.
        record_stream_source: Live record source used by every check.
    """

    def __init__(self, actual: Any, record_stream_source: RecordStreamSource) -> None:
        if record_stream_source is None:
            raise AssertionSetupError(
                f"{type(self).__name__} requires a record stream source."
            )
        self.actual = actual
        self.record_stream_source = record_stream_source

    def _fail(self, message: str) -> NoReturn:
        logger.debug(f"{type(self).__name__} failed: {message}")
        raise AssertionError(message)

    def _require(self, condition: bool, message: str) -> None:
        if not condition:
            self._fail(message)

    def _require_single(self, matches: List[T], message: str) -> T:
        """Return the only element of matches, or fail with message."""
        if len(matches) != 1:
            self._fail(message)
        return matches[0]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.actual!r})"
