from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="StoredRecord",
            fields=[
                (
                    "position",
                    models.BigIntegerField(
                        help_text="Emission order of the record. Strictly increasing.",
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                (
                    "key",
                    models.BigIntegerField(
                        default=-1,
                        help_text="Subject entity key. -1 when not tied to an entity.",
                    ),
                ),
                (
                    "value_type",
                    models.CharField(
                        help_text="Record category (e.g. PROCESS_INSTANCE, MESSAGE).",
                        max_length=64,
                    ),
                ),
                (
                    "intent",
                    models.CharField(
                        help_text="Intent name, scoped to value_type.",
                        max_length=64,
                    ),
                ),
                (
                    "record_type",
                    models.CharField(
                        default="EVENT",
                        help_text="EVENT, COMMAND or COMMAND_REJECTION.",
                        max_length=32,
                    ),
                ),
                (
                    "rejection_type",
                    models.CharField(
                        default="NULL_VAL",
                        help_text="NULL_VAL unless the engine refused the command.",
                        max_length=64,
                    ),
                ),
                ("rejection_reason", models.TextField(blank=True, default="")),
                ("partition_id", models.IntegerField(default=1)),
                (
                    "timestamp",
                    models.DateTimeField(
                        blank=True,
                        help_text="When the engine wrote the record.",
                        null=True,
                    ),
                ),
                (
                    "value",
                    models.JSONField(
                        blank=True,
                        default=dict,
                        help_text="Category-specific payload.",
                    ),
                ),
            ],
            options={
                "db_table": "pa_record_store",
                "ordering": ["position"],
                "indexes": [
                    models.Index(
                        fields=["value_type", "intent"],
                        name="idx_rec_type_intent",
                    ),
                    models.Index(fields=["key"], name="idx_rec_key"),
                ],
            },
        ),
    ]
