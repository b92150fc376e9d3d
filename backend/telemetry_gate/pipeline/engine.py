"""
PipelineEngine — the orchestrator that runs steps sequentially.

Responsibilities:
    - Build a fresh PipelineContext for the triggering document
    - Resolve the step sequence from the flow builder
    - Execute each step with timing, logging, and error handling
    - Retry retryable steps
    - Return a complete PipelineResult carrying the routing verdict
"""

from __future__ import annotations

import asyncio
import traceback
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable

import structlog

from telemetry_gate.core.constants import PipelineStatus, StepStatus
from telemetry_gate.pipeline.context import DocumentInfo, PipelineContext, StepResult
from telemetry_gate.pipeline.errors import StepExecutionError
from telemetry_gate.pipeline.step import PipelineStep
from telemetry_gate.validation.models import Schema


@dataclass
class PipelineResult:
    """Final outcome of a pipeline execution."""

    execution_id: str
    status: str                     # PipelineStatus value
    started_at: datetime | None = None
    completed_at: datetime | None = None
    total_duration_ms: int = 0
    steps_completed: int = 0
    total_steps: int = 0
    step_results: list[dict[str, Any]] = field(default_factory=list)
    context_summary: dict[str, Any] = field(default_factory=dict)
    verdict: dict[str, Any] | None = None
    retryable: bool = False
    error: str | None = None


class PipelineEngine:
    """
    Runs a sequence of PipelineStep objects against a PipelineContext.

    Usage::

        engine = PipelineEngine(flow_builder=lambda: gate_flow(store, layout))
        result = await engine.run(
            DocumentInfo(name="v-001.json", source_key="landing/v-001.json"),
            schema=Schema.default(),
        )
    """

    def __init__(self, flow_builder: Callable[[], list[PipelineStep]] | None = None) -> None:
        self.flow_builder = flow_builder
        self.logger = structlog.get_logger("pipeline.engine")

    async def run(
        self,
        document: DocumentInfo,
        schema: Schema | None = None,
    ) -> PipelineResult:
        """
        Full pipeline execution for one triggering document.

        Args:
            document: Where the document lives in the landing area.
            schema: Required-field schema; defaults to Schema.default().
        """
        started_at = datetime.now(timezone.utc)

        ctx = PipelineContext(document=document, schema=schema or Schema.default())

        log = self.logger.bind(
            execution_id=ctx.execution_id,
            document_name=document.name,
        )
        log.info("Pipeline started", source_key=document.source_key)

        if self.flow_builder is None:
            log.error("No flow builder configured")
            return PipelineResult(
                execution_id=ctx.execution_id,
                status=PipelineStatus.FAILED,
                started_at=started_at,
                completed_at=datetime.now(timezone.utc),
                error="No flow builder configured",
            )

        result = await self.run_steps(ctx, self.flow_builder())
        result.started_at = started_at

        log.info(
            "Pipeline finished",
            status=result.status,
            verdict=result.verdict,
            steps_completed=result.steps_completed,
            total_steps=result.total_steps,
            duration_ms=result.total_duration_ms,
        )

        return result

    async def run_steps(
        self,
        ctx: PipelineContext,
        steps: list[PipelineStep],
    ) -> PipelineResult:
        """
        Execute an ordered list of steps against a context.

        Can be called directly with a pre-built context and step list
        (tests, dry runs).
        """
        started_at = datetime.now(timezone.utc)
        ctx.total_steps = len(steps)

        log = self.logger.bind(
            execution_id=ctx.execution_id,
            document_name=ctx.document.name,
            total_steps=len(steps),
        )

        pipeline_status = PipelineStatus.RUNNING
        steps_completed = 0
        failure: StepResult | None = None

        for index, step in enumerate(steps):
            ctx.current_step_index = index
            step_number = index + 1

            step_log = log.bind(
                step_name=step.name,
                step_index=step_number,
                step_description=step.description,
            )

            # ── Check skip condition ──────────────────
            try:
                if await step.should_skip(ctx):
                    step_log.info("Step skipped")
                    now = datetime.now(timezone.utc)
                    ctx.step_results.append(StepResult(
                        step_name=step.name,
                        status=StepStatus.SKIPPED,
                        started_at=now,
                        completed_at=now,
                    ))
                    steps_completed += 1
                    continue
            except Exception as exc:
                step_log.warning("should_skip raised, running step anyway", error=str(exc))

            # ── Execute step (with retry) ─────────────
            step_log.debug(f"Step {step_number}/{len(steps)}: {step.description}")

            result = await self._execute_with_retry(step, ctx, step_log)
            ctx.step_results.append(result)

            if result.status == StepStatus.COMPLETED:
                steps_completed += 1
                step_log.debug(
                    "Step completed",
                    duration_ms=result.duration_ms,
                    metadata=result.metadata,
                )
            else:
                step_log.error(
                    "Step failed — pipeline stopping",
                    error=result.error,
                    duration_ms=result.duration_ms,
                )
                ctx.add_error(f"Step '{step.name}' failed: {result.error}")
                pipeline_status = PipelineStatus.FAILED
                failure = result
                break

        # ── Finalise ──────────────────────────────────
        completed_at = datetime.now(timezone.utc)
        total_duration_ms = int((completed_at - started_at).total_seconds() * 1000)

        if pipeline_status != PipelineStatus.FAILED:
            pipeline_status = PipelineStatus.COMPLETED

        return PipelineResult(
            execution_id=ctx.execution_id,
            status=pipeline_status,
            started_at=started_at,
            completed_at=completed_at,
            total_duration_ms=total_duration_ms,
            steps_completed=steps_completed,
            total_steps=len(steps),
            step_results=[sr.to_dict() for sr in ctx.step_results],
            context_summary=ctx.to_summary_dict(),
            verdict=ctx.verdict.to_dict() if ctx.verdict else None,
            retryable=bool(failure and failure.metadata.get("retryable", False)),
            error=failure.error if failure else None,
        )

    async def _execute_with_retry(
        self,
        step: PipelineStep,
        ctx: PipelineContext,
        log: structlog.BoundLogger,
    ) -> StepResult:
        """
        Execute a step.  If retryable and it fails, retry up to max_retries.
        """
        max_attempts = step.max_retries if step.retryable else 1

        for attempt in range(1, max_attempts + 1):
            try:
                return await step.execute(ctx)

            except StepExecutionError as exc:
                if step.retryable and exc.retryable and attempt < max_attempts:
                    wait_seconds = 2 ** attempt  # exponential backoff
                    log.warning(
                        f"Step failed (attempt {attempt}/{max_attempts}), retrying in {wait_seconds}s",
                        error=str(exc),
                    )
                    await asyncio.sleep(wait_seconds)
                    continue

                # Final failure
                now = datetime.now(timezone.utc)
                return StepResult(
                    step_name=step.name,
                    status=StepStatus.FAILED,
                    started_at=now,
                    completed_at=now,
                    error=str(exc),
                    metadata={
                        "attempts": attempt,
                        "retryable": exc.retryable,
                        **exc.details,
                    },
                )

            except Exception as exc:
                # Unexpected error — never retry
                log.exception("Unexpected error in step", error=str(exc))
                now = datetime.now(timezone.utc)
                return StepResult(
                    step_name=step.name,
                    status=StepStatus.FAILED,
                    started_at=now,
                    completed_at=now,
                    error=f"Unexpected: {exc}",
                    metadata={"traceback": traceback.format_exc()},
                )

        return StepResult(
            step_name=step.name,
            status=StepStatus.FAILED,
            error="Retry loop exited unexpectedly",
        )
