"""
PipelineContext — mutable state object carried through every step.

This is the single source of truth for one gate run.  Each step reads
from and writes to the context.  One context is built per triggering
document and discarded after the run; nothing is shared between runs.

The values the steps put on it (Batch, outcome, verdict) are frozen
objects from telemetry_gate.validation; only the slots are mutable.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from telemetry_gate.validation.models import (
    Batch,
    ParseResult,
    RouteVerdict,
    Schema,
    ValidationOutcome,
)


# ═══════════════════════════════════════════════════════════
#  DocumentInfo — where the document came from and went to
# ═══════════════════════════════════════════════════════════

@dataclass
class DocumentInfo:
    """
    Storage metadata for the triggering document.

    Args:
        name: Document name relative to the landing prefix,
              e.g. "2024/05/vehicles-001.json".
        source_key: Full object key in the landing area.
        destination_key: Object key written by the routing step.
        size_bytes: Length of the payload as fetched.
    """

    name: str
    source_key: str
    destination_key: str | None = None
    size_bytes: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "source_key": self.source_key,
            "destination_key": self.destination_key,
            "size_bytes": self.size_bytes,
        }


# ═══════════════════════════════════════════════════════════
#  StepResult
# ═══════════════════════════════════════════════════════════

@dataclass
class StepResult:
    """Outcome of a single pipeline step execution."""

    step_name: str
    status: str                     # StepStatus value
    started_at: datetime | None = None
    completed_at: datetime | None = None
    duration_ms: int = 0
    error: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Serialise for task results / logs."""
        return {
            "step_name": self.step_name,
            "status": self.status,
            "started_at": self.started_at.isoformat() if self.started_at else None,
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
            "duration_ms": self.duration_ms,
            "error": self.error,
            "metadata": self.metadata,
        }


# ═══════════════════════════════════════════════════════════
#  PipelineContext
# ═══════════════════════════════════════════════════════════

@dataclass
class PipelineContext:
    """
    Carries all state between gate steps.

    Populated progressively:
        fetch    → document, raw_payload
        parse    → parse_result
        validate → validation_outcome
        route    → verdict, document.destination_key
    """

    # ─── Identity (set at init) ────────────────────────
    document: DocumentInfo
    schema: Schema = field(default_factory=Schema.default)
    execution_id: str = field(default_factory=lambda: str(uuid.uuid4()))

    # ─── Payload ───────────────────────────────────────
    raw_payload: bytes | None = None

    # ─── Decision ──────────────────────────────────────
    parse_result: ParseResult | None = None
    validation_outcome: ValidationOutcome | None = None
    verdict: RouteVerdict | None = None

    # ─── Execution tracking ────────────────────────────
    current_step_index: int = 0
    total_steps: int = 0
    step_results: list[StepResult] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    # ─── Helpers ───────────────────────────────────────

    @property
    def batch(self) -> Batch | None:
        """The parsed batch, or None if parsing failed or hasn't run."""
        return self.parse_result if isinstance(self.parse_result, Batch) else None

    def add_error(self, error: str) -> None:
        """Record a step failure message."""
        self.errors.append(error)

    def to_summary_dict(self) -> dict[str, Any]:
        """Compact summary for logging / task results."""
        return {
            "execution_id": self.execution_id,
            "document": self.document.to_dict(),
            "required_fields": list(self.schema.required_fields),
            "record_count": len(self.batch) if self.batch is not None else None,
            "validation_outcome": (
                self.validation_outcome.to_dict() if self.validation_outcome else None
            ),
            "verdict": self.verdict.to_dict() if self.verdict else None,
            "steps_completed": len(self.step_results),
            "total_steps": self.total_steps,
            "errors": self.errors,
        }
