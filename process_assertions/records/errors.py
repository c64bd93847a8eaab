"""
Process Assertions Records - Errors
===================================
Error types for the record layer.
Assertion failures are NOT defined here; they are plain AssertionError.
"""


class RecordStreamError(Exception):
    """Base error for record stream operations."""
    pass


class RecordPositionError(RecordStreamError):
    """Record position does not continue the stream (append-only order)."""

    def __init__(self, position: int, last_position: int):
        self.position = position
        self.last_position = last_position
        super().__init__(
            f"Record position {position} must be greater than the last "
            f"position {last_position} in the stream."
        )


class RecordDecodeError(RecordStreamError):
    """Exported record could not be turned into a Record."""

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"Cannot decode exported record: {detail}")
