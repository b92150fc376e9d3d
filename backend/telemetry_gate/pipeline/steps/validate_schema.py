"""
ValidateSchemaStep — required-field presence check on the parsed batch.

Skipped when parsing failed.  Stops at the first non-conforming record.
"""

from __future__ import annotations

from telemetry_gate.core.logging import get_logger
from telemetry_gate.pipeline.context import PipelineContext, StepResult
from telemetry_gate.pipeline.step import PipelineStep
from telemetry_gate.validation.models import EmptyBatch, MissingFields, Valid
from telemetry_gate.validation.schema_validator import validate

logger = get_logger(__name__)


class ValidateSchemaStep(PipelineStep):
    """Validate each record against the required-field schema."""

    name = "validate_schema"
    description = "Validate record schema (required fields)"

    async def should_skip(self, ctx: PipelineContext) -> bool:
        return ctx.batch is None

    async def execute(self, ctx: PipelineContext) -> StepResult:
        started_at = self._now()
        batch = ctx.batch
        log = logger.bind(execution_id=ctx.execution_id, document_name=ctx.document.name)

        outcome = validate(batch, ctx.schema)
        ctx.validation_outcome = outcome

        if isinstance(outcome, EmptyBatch):
            log.warning("Validation failed — JSON array is empty.")
        elif isinstance(outcome, MissingFields):
            log.warning(
                f"Record[{outcome.record_index}] failed — missing fields: "
                f"{', '.join(outcome.missing_fields)}",
                record_index=outcome.record_index,
                missing_fields=list(outcome.missing_fields),
            )
        elif isinstance(outcome, Valid):
            first = batch.records[0]
            log.info(f"Validation passed — {len(batch)} vehicle record(s) found.")
            log.info(
                "Sample record",
                vehicle_id=first.get("VehicleID"),
                city=first.get("City"),
            )

        return self._success(started_at, metadata={
            "records": len(batch),
            "outcome": outcome.to_dict(),
        })
