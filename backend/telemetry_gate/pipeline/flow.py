"""
Gate flow — the ordered step list for one landing document.

    Fetch → Parse → Validate (skipped if parse failed) → Route

Parse and validation failures never stop the flow: they become a
Rejected verdict in the routing step.  Only storage faults fail the run.
"""

from __future__ import annotations

from telemetry_gate.pipeline.step import PipelineStep
from telemetry_gate.pipeline.steps.fetch_document import FetchDocumentStep
from telemetry_gate.pipeline.steps.parse_payload import ParsePayloadStep
from telemetry_gate.pipeline.steps.route_document import RouteDocumentStep
from telemetry_gate.pipeline.steps.validate_schema import ValidateSchemaStep
from telemetry_gate.storage.keys import KeyLayout
from telemetry_gate.storage.object_store import ObjectStore


def gate_flow(store: ObjectStore, layout: KeyLayout) -> list[PipelineStep]:
    """Build a fresh step list; steps hold no per-run state."""
    return [
        FetchDocumentStep(store),
        ParsePayloadStep(),
        ValidateSchemaStep(),
        RouteDocumentStep(store, layout),
    ]
