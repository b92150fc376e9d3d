"""
Validation gate core — parse, validate and route one telemetry document.

Pure functions only; all storage I/O lives in the pipeline steps.
"""

from telemetry_gate.validation.models import (
    Accepted,
    Batch,
    EmptyBatch,
    MissingFields,
    ParseFailure,
    Rejected,
    RouteVerdict,
    Schema,
    Valid,
    ValidationOutcome,
)
from telemetry_gate.validation.payload_parser import parse
from telemetry_gate.validation.routing import decide, evaluate
from telemetry_gate.validation.schema_validator import validate

__all__ = [
    "Accepted",
    "Batch",
    "EmptyBatch",
    "MissingFields",
    "ParseFailure",
    "Rejected",
    "RouteVerdict",
    "Schema",
    "Valid",
    "ValidationOutcome",
    "decide",
    "evaluate",
    "parse",
    "validate",
]
