"""Schema validation — required-field presence on every record of a batch."""

from __future__ import annotations

from telemetry_gate.validation.models import (
    Batch,
    EmptyBatch,
    MissingFields,
    Schema,
    Valid,
    ValidationOutcome,
)


def validate(batch: Batch, schema: Schema) -> ValidationOutcome:
    """
    Check every record for the schema's required keys.

    Stops at the first record missing anything and reports only that
    record.  Presence is all that is checked: null, "" or a wrongly
    typed value still counts as present.
    """
    if batch.is_empty:
        return EmptyBatch()

    for index, record in enumerate(batch):
        missing = schema.missing_from(record)
        if missing:
            return MissingFields(record_index=index, missing_fields=missing)

    return Valid()
