"""
ParsePayloadStep — turns the fetched bytes into a Batch.

A parse failure is a business outcome, not a step failure: the step
completes, stores the ParseFailure on the context, and the routing step
sends the document to rejected.
"""

from __future__ import annotations

from telemetry_gate.core.logging import get_logger
from telemetry_gate.pipeline.context import PipelineContext, StepResult
from telemetry_gate.pipeline.errors import StepExecutionError
from telemetry_gate.pipeline.step import PipelineStep
from telemetry_gate.validation.models import ParseFailure
from telemetry_gate.validation.payload_parser import parse

logger = get_logger(__name__)


class ParsePayloadStep(PipelineStep):
    """Parse the raw payload as a JSON object or array of objects."""

    name = "parse_payload"
    description = "Parse payload into a batch of records"

    async def execute(self, ctx: PipelineContext) -> StepResult:
        started_at = self._now()

        if ctx.raw_payload is None:
            raise StepExecutionError(
                "No payload on context; fetch_document must run first",
                execution_id=ctx.execution_id,
                step_name=self.name,
                retryable=False,
            )

        result = parse(ctx.raw_payload)
        ctx.parse_result = result

        if isinstance(result, ParseFailure):
            logger.error(
                f"JSON parse error: {result.message}",
                execution_id=ctx.execution_id,
                document_name=ctx.document.name,
            )
            return self._success(started_at, metadata={"parsed": False, "error": result.message})

        return self._success(started_at, metadata={"parsed": True, "records": len(result)})
