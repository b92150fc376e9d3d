"""
FetchDocumentStep — reads the triggering document from the landing area.

Sets ctx.raw_payload to the exact bytes stored; nothing is decoded here.
"""

from __future__ import annotations

from telemetry_gate.core.logging import get_logger
from telemetry_gate.pipeline.context import PipelineContext, StepResult
from telemetry_gate.pipeline.errors import DocumentNotFoundError, StepExecutionError, StorageError
from telemetry_gate.pipeline.step import PipelineStep
from telemetry_gate.storage.object_store import ObjectStore

logger = get_logger(__name__)


class FetchDocumentStep(PipelineStep):
    """Download the raw document bytes from object storage."""

    name = "fetch_document"
    description = "Fetch raw document from the landing area"
    retryable = True
    max_retries = 3

    def __init__(self, store: ObjectStore) -> None:
        self.store = store

    async def execute(self, ctx: PipelineContext) -> StepResult:
        started_at = self._now()
        key = ctx.document.source_key

        try:
            payload = self.store.get_bytes(key)
        except DocumentNotFoundError as exc:
            # Gone before we got to it; retrying won't bring it back.
            raise StepExecutionError(
                f"Document not found: {key}",
                execution_id=ctx.execution_id,
                step_name=self.name,
                retryable=False,
                details=exc.details,
            ) from exc
        except StorageError as exc:
            raise StepExecutionError(
                f"Failed to fetch document: {exc}",
                execution_id=ctx.execution_id,
                step_name=self.name,
                details=exc.details,
            ) from exc

        ctx.raw_payload = payload
        ctx.document.size_bytes = len(payload)

        logger.info(
            "Processing document",
            execution_id=ctx.execution_id,
            document_name=ctx.document.name,
            source_key=key,
            size_bytes=len(payload),
        )

        return self._success(started_at, metadata={
            "source_key": key,
            "size_bytes": len(payload),
        })
