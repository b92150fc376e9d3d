"""
RouteDocumentStep — decides the verdict and writes the document to
exactly one destination.

The bytes written are the bytes fetched; the payload is never rewritten
or wrapped.  Re-running on the same document overwrites the same key
with the same content.
"""

from __future__ import annotations

from telemetry_gate.core.constants import Destination
from telemetry_gate.core.logging import get_logger
from telemetry_gate.pipeline.context import PipelineContext, StepResult
from telemetry_gate.pipeline.errors import StepExecutionError, StorageError
from telemetry_gate.pipeline.step import PipelineStep
from telemetry_gate.storage.keys import KeyLayout
from telemetry_gate.storage.object_store import ObjectStore
from telemetry_gate.validation.routing import decide

logger = get_logger(__name__)


class RouteDocumentStep(PipelineStep):
    """Copy the original document to staging/ or rejected/."""

    name = "route_document"
    description = "Route document to staging or rejected"
    retryable = True
    max_retries = 3

    def __init__(self, store: ObjectStore, layout: KeyLayout) -> None:
        self.store = store
        self.layout = layout

    async def execute(self, ctx: PipelineContext) -> StepResult:
        started_at = self._now()

        if ctx.raw_payload is None or ctx.parse_result is None:
            raise StepExecutionError(
                "Nothing to route; fetch_document and parse_payload must run first",
                execution_id=ctx.execution_id,
                step_name=self.name,
                retryable=False,
            )

        # Pure and deterministic, so safe to recompute on retry.
        verdict = decide(ctx.parse_result, ctx.validation_outcome)
        ctx.verdict = verdict

        destination_key = self.layout.destination_key(ctx.document.name, verdict.destination)

        try:
            self.store.put_bytes(destination_key, ctx.raw_payload)
        except StorageError as exc:
            raise StepExecutionError(
                f"Failed to write {verdict.destination} copy: {exc}",
                execution_id=ctx.execution_id,
                step_name=self.name,
                details=exc.details,
            ) from exc

        ctx.document.destination_key = destination_key

        log = logger.bind(
            execution_id=ctx.execution_id,
            document_name=ctx.document.name,
            destination_key=destination_key,
        )
        if verdict.destination == Destination.STAGING:
            log.info("File copied to staging folder")
        else:
            log.warning("Invalid file copied to rejected folder", reason=verdict.reason.describe())

        return self._success(started_at, metadata={
            "destination": verdict.destination,
            "destination_key": destination_key,
        })
