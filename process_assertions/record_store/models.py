"""
Process Assertions Record Store - Stored Record Model
====================================================
One row per exported engine record.

RULES (NON-NEGOTIABLE):
- INSERT only; rows are never updated or deleted
- position is the primary key and the read order
- value is stored with snake_case field names
"""

from django.db import models


class StoredRecord(models.Model):

    # ── Identity & Order ──────────────────────────────────────
    position = models.BigIntegerField(
        primary_key=True,
        help_text="Emission order of the record. Strictly increasing.",
    )

    key = models.BigIntegerField(
        default=-1,
        help_text="Subject entity key. -1 when not tied to an entity.",
    )

    # ── Classification ────────────────────────────────────────
    value_type = models.CharField(
        max_length=64,
        help_text="Record category (e.g. PROCESS_INSTANCE, MESSAGE).",
    )

    intent = models.CharField(
        max_length=64,
        help_text="Intent name, scoped to value_type.",
    )

    record_type = models.CharField(
        max_length=32,
        default="EVENT",
        help_text="EVENT, COMMAND or COMMAND_REJECTION.",
    )

    # ── Rejection ─────────────────────────────────────────────
    rejection_type = models.CharField(
        max_length=64,
        default="NULL_VAL",
        help_text="NULL_VAL unless the engine refused the command.",
    )

    rejection_reason = models.TextField(
        blank=True,
        default="",
    )

    # ── Source ────────────────────────────────────────────────
    partition_id = models.IntegerField(default=1)

    timestamp = models.DateTimeField(
        null=True,
        blank=True,
        help_text="When the engine wrote the record.",
    )

    # ── Payload ───────────────────────────────────────────────
    value = models.JSONField(
        default=dict,
        blank=True,
        help_text="Category-specific payload.",
    )

    class Meta:
        db_table = "pa_record_store"
        ordering = ["position"]
        indexes = [
            models.Index(
                fields=["value_type", "intent"],
                name="idx_rec_type_intent",
            ),
            models.Index(
                fields=["key"],
                name="idx_rec_key",
            ),
        ]

    # ── Immutability guards ───────────────────────────────────

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise PermissionError(
                "Stored records are immutable. Cannot update a persisted record."
            )
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise PermissionError("Stored records are never deleted.")

    def __str__(self):
        return f"[{self.position}] {self.value_type}.{self.intent} key={self.key}"
