"""
Process Assertions - Assertion Setup Errors
===========================================
Errors raised when an assertion cannot be BUILT.
A failed verification is an AssertionError, never one of these.
"""


class AssertionSetupError(Exception):
    """Base error for misuse of the assertion entry points."""
    pass


class UnsupportedResponseError(AssertionSetupError, TypeError):
    """assert_that() received an object with no matching assertion."""

    def __init__(self, response: object):
        self.response = response
        super().__init__(
            f"No assertion available for response of type "
            f"'{type(response).__name__}'."
        )


class RecordStreamNotInitializedError(AssertionSetupError):
    """No record stream source was passed or initialized for this thread."""

    def __init__(self):
        super().__init__(
            "No record stream source available. Pass one to assert_that() "
            "or call init_record_stream() first."
        )
