"""
Domain-specific exception hierarchy for the pipeline engine.

All pipeline exceptions inherit from PipelineError so callers can
catch broadly or narrowly as needed.  Each exception carries structured
context (step name, execution ID, etc.) for logging/debugging.

Note that a document failing validation is NOT an exception: it is a
normal Rejected verdict.  These classes cover infrastructure faults only.
"""

from __future__ import annotations


class PipelineError(Exception):
    """Base exception for all pipeline errors."""

    def __init__(
        self,
        message: str,
        *,
        execution_id: str | None = None,
        step_name: str | None = None,
        details: dict | None = None,
    ) -> None:
        self.execution_id = execution_id
        self.step_name = step_name
        self.details = details or {}
        super().__init__(message)


class StepExecutionError(PipelineError):
    """A step failed during execution."""

    def __init__(self, message: str, *, retryable: bool = True, **kwargs) -> None:
        self.retryable = retryable
        super().__init__(message, **kwargs)


class StorageError(PipelineError):
    """Object storage operation (S3/MinIO/local) failed."""
    pass


class DocumentNotFoundError(StorageError):
    """The triggering document is not in the landing area."""
    pass
