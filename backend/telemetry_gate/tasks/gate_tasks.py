"""
Celery tasks — one gate run per landing document.

The storage notification webhook dispatches validate_document for every
new object under the landing prefix.  Delivery is at-least-once; a
repeated run recomputes the same verdict and rewrites the same key.
"""

import asyncio
from typing import Any

import structlog

from telemetry_gate.core.config import settings
from telemetry_gate.core.constants import PipelineStatus
from telemetry_gate.pipeline.context import DocumentInfo
from telemetry_gate.pipeline.engine import PipelineEngine, PipelineResult
from telemetry_gate.pipeline.flow import gate_flow
from telemetry_gate.pipeline.errors import PipelineError
from telemetry_gate.storage.keys import KeyLayout
from telemetry_gate.storage.object_store import ObjectStore, build_object_store
from telemetry_gate.tasks import celery_app
from telemetry_gate.validation.models import Schema

logger = structlog.get_logger("tasks.gate")


class GateRunFailed(PipelineError):
    """A gate run stopped on an infrastructure fault."""

    def __init__(self, message: str, *, retryable: bool = True, **kwargs) -> None:
        self.retryable = retryable
        super().__init__(message, **kwargs)


def run_gate(
    document_name: str,
    store: ObjectStore | None = None,
    layout: KeyLayout | None = None,
    schema: Schema | None = None,
) -> dict[str, Any]:
    """
    Run the gate pipeline for one document and return a JSON-safe summary.

    Raises GateRunFailed if the pipeline stopped on a storage fault.
    """
    store = store or build_object_store(settings)
    layout = layout or KeyLayout.from_settings(settings)
    schema = schema or Schema.from_settings(settings.LEGACY_FIELD_SPELLING)

    document = DocumentInfo(name=document_name, source_key=layout.landing_key(document_name))
    engine = PipelineEngine(flow_builder=lambda: gate_flow(store, layout))
    result: PipelineResult = asyncio.run(engine.run(document, schema=schema))

    if result.status != PipelineStatus.COMPLETED:
        raise GateRunFailed(
            result.error or "Gate run failed",
            execution_id=result.execution_id,
            retryable=result.retryable,
            details=result.context_summary,
        )

    return {
        "execution_id": result.execution_id,
        "document_name": document_name,
        "status": result.status,
        "verdict": result.verdict,
        "destination_key": result.context_summary["document"]["destination_key"],
        "duration_ms": result.total_duration_ms,
    }


@celery_app.task(
    bind=True,
    name="telemetry_gate.tasks.gate_tasks.validate_document",
    max_retries=3,
    default_retry_delay=30,
)
def validate_document(self, document_name: str) -> dict[str, Any]:
    """
    Validate one landing document and route it to staging or rejected.

    Storage faults are retried by Celery (max_retries); a missing
    document is not.
    """
    task_log = logger.bind(task_id=self.request.id, document_name=document_name)
    task_log.info("Gate task started")

    try:
        summary = run_gate(document_name)
    except GateRunFailed as exc:
        if exc.retryable:
            task_log.warning("Gate run failed, scheduling retry", error=str(exc))
            raise self.retry(exc=exc)
        task_log.error("Gate run failed permanently", error=str(exc))
        raise

    task_log.info(
        "Gate task finished",
        verdict=summary["verdict"]["verdict"],
        destination_key=summary["destination_key"],
        duration_ms=summary["duration_ms"],
    )
    return summary
