"""
Process Assertions - Message Assertions
=======================================
Checks on one published message, identified by its message key.

Correlation is read from PROCESS_MESSAGE_SUBSCRIPTION.CORRELATED
records, expiry from MESSAGE.EXPIRED records. Rejected commands
never count.
"""

from __future__ import annotations

from process_assertions.assertions.base import AbstractRecordAssert
from process_assertions.assertions.process_instance import ProcessInstanceAssert
from process_assertions.filters.stream_filter import (
    MessageRecordFilter,
    ProcessMessageSubscriptionRecordFilter,
    message_records,
    process_message_subscription_records,
)
from process_assertions.records.model import UNSET_KEY, RejectionType
from process_assertions.records.source import RecordStreamSource
from process_assertions.records.value_types import (
    MessageIntent,
    ProcessMessageSubscriptionIntent,
)
from process_assertions.responses import PublishMessageResponse


class MessageAssert(AbstractRecordAssert):

    def __init__(
        self,
        actual: PublishMessageResponse,
        record_stream_source: RecordStreamSource,
    ) -> None:
        super().__init__(actual, record_stream_source)

    @property
    def message_key(self) -> int:
        return self.actual.message_key

    def _correlations(self) -> ProcessMessageSubscriptionRecordFilter:
        return (
            process_message_subscription_records(self.record_stream_source)
            .with_message_key(self.message_key)
            .with_rejection_type(RejectionType.NULL_VAL)
            .with_intent(ProcessMessageSubscriptionIntent.CORRELATED)
        )

    def _expirations(self) -> MessageRecordFilter:
        return (
            message_records(self.record_stream_source)
            .with_key(self.message_key)
            .with_rejection_type(RejectionType.NULL_VAL)
            .with_intent(MessageIntent.EXPIRED)
        )

    def has_been_correlated(self) -> MessageAssert:
        """Verifies the message has been correlated to a process instance."""
        self._require(
            self._correlations().exists(),
            f"Message with key {self.message_key} was not correlated",
        )
        return self

    def has_not_been_correlated(self) -> MessageAssert:
        """Verifies the message has not been correlated."""
        correlation = self._correlations().first()
        if correlation is not None:
            self._fail(
                f"Message with key {self.message_key} was correlated to "
                f"process instance "
                f"{correlation.get('process_instance_key', UNSET_KEY)}"
            )
        return self

    def has_expired(self) -> MessageAssert:
        self._require(
            self._expirations().exists(),
            f"Message with key {self.message_key} was not expired",
        )
        return self

    def has_not_expired(self) -> MessageAssert:
        self._require(
            not self._expirations().exists(),
            f"Message with key {self.message_key} was expired",
        )
        return self

    def extracting_process_instance(self) -> ProcessInstanceAssert:
        """
        Hand off to the process instance this message was correlated to.

        Fails unless exactly one correlation exists for the message key.
        """
        correlated = [
            r.get("process_instance_key") for r in self._correlations().stream()
        ]
        process_instance_key = self._require_single(
            correlated,
            f"Expected to find one correlated process instance for message key "
            f"{self.message_key} but found {len(correlated)}: {correlated}",
        )
        return ProcessInstanceAssert(process_instance_key, self.record_stream_source)
