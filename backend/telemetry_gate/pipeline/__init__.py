"""
Pipeline Engine — step-based orchestrator for the ingestion gate.

This package runs each landing document through fetch → parse →
validate → route, with per-step logging, error handling, and retry
of storage steps.
"""

from telemetry_gate.pipeline.context import DocumentInfo, PipelineContext, StepResult
from telemetry_gate.pipeline.engine import PipelineEngine, PipelineResult
from telemetry_gate.pipeline.step import PipelineStep

__all__ = [
    "PipelineEngine",
    "PipelineResult",
    "PipelineContext",
    "PipelineStep",
    "DocumentInfo",
    "StepResult",
]
