"""
Process Assertions Records - Canonical Record
=============================================
The single, immutable unit of engine history.

RULES (NON-NEGOTIABLE):
- Records are produced by the engine; this library only reads them
- No field changes after construction (frozen, read-only value)
- Intent must belong to the record's value type
- key == -1 means "not yet tied to an entity"
- rejection_type NULL_VAL means the engine accepted the command

This file contains NO query logic.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional

from process_assertions.records.value_types import ValueType, intent_type_for

UNSET_KEY = -1


# ══════════════════════════════════════════════════════════════
# RECORD TYPE / REJECTION TYPE
# ══════════════════════════════════════════════════════════════

class RecordType(Enum):
    EVENT = "EVENT"
    COMMAND = "COMMAND"
    COMMAND_REJECTION = "COMMAND_REJECTION"


class RejectionType(Enum):
    """
    Why the engine refused a command.

    NULL_VAL is the "none" marker: the record is not a rejection.
    """
    NULL_VAL = "NULL_VAL"
    INVALID_ARGUMENT = "INVALID_ARGUMENT"
    NOT_FOUND = "NOT_FOUND"
    ALREADY_EXISTS = "ALREADY_EXISTS"
    INVALID_STATE = "INVALID_STATE"
    PROCESSING_ERROR = "PROCESSING_ERROR"
    EXCEEDED_BATCH_RECORD_SIZE = "EXCEEDED_BATCH_RECORD_SIZE"


# ══════════════════════════════════════════════════════════════
# RECORD
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Record:
    """
    One engine-emitted fact.

    Fields:
        position:         Emission order. Strictly increasing per stream.
        key:              Subject entity key (process instance, message, job...).
        value_type:       Record category.
        intent:           Sub-type tag, member of the value type's intent enum.
        record_type:      EVENT | COMMAND | COMMAND_REJECTION.
        rejection_type:   NULL_VAL unless the engine refused the command.
        rejection_reason: Free text explanation of a rejection.
        value:            Category-specific payload (snake_case field names).
        timestamp:        When the engine wrote the record.
        partition_id:     Engine partition that produced the record.
    """

    position: int
    key: int
    value_type: ValueType
    intent: Enum
    record_type: RecordType = RecordType.EVENT
    rejection_type: RejectionType = RejectionType.NULL_VAL
    rejection_reason: str = ""
    value: Mapping[str, Any] = field(default_factory=dict)
    timestamp: Optional[datetime] = None
    partition_id: int = 1

    def __post_init__(self):
        # bool is an int subclass
        if (
            not isinstance(self.position, int)
            or isinstance(self.position, bool)
            or self.position < 0
        ):
            raise ValueError("position must be a non-negative int.")

        if not isinstance(self.key, int) or isinstance(self.key, bool):
            raise ValueError("key must be int.")

        if not isinstance(self.value_type, ValueType):
            raise ValueError(
                f"value_type must be ValueType, got {type(self.value_type).__name__}."
            )

        expected_intents = intent_type_for(self.value_type)
        if not isinstance(self.intent, expected_intents):
            raise ValueError(
                f"intent {self.intent!r} does not belong to value type "
                f"{self.value_type.value}; expected {expected_intents.__name__}."
            )

        if not isinstance(self.record_type, RecordType):
            raise ValueError("record_type must be RecordType.")

        if not isinstance(self.rejection_type, RejectionType):
            raise ValueError("rejection_type must be RejectionType.")

        object.__setattr__(self, "value", MappingProxyType(dict(self.value)))

    @property
    def is_rejection(self) -> bool:
        return self.rejection_type != RejectionType.NULL_VAL

    def get(self, field_name: str, default: Any = None) -> Any:
        """Read one value field."""
        return self.value.get(field_name, default)

    def to_dict(self) -> dict:
        return {
            "position": self.position,
            "key": self.key,
            "value_type": self.value_type.value,
            "intent": self.intent.name,
            "record_type": self.record_type.value,
            "rejection_type": self.rejection_type.value,
            "rejection_reason": self.rejection_reason,
            "value": dict(self.value),
            "timestamp": self.timestamp.isoformat() if self.timestamp else None,
            "partition_id": self.partition_id,
        }
