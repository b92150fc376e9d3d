"""Shared constants and enums used across the application."""

from enum import StrEnum


class PipelineStatus(StrEnum):
    """Overall status of a pipeline execution."""

    RUNNING = "RUNNING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"


class StepStatus(StrEnum):
    """Status of an individual pipeline step."""

    COMPLETED = "COMPLETED"
    FAILED = "FAILED"
    SKIPPED = "SKIPPED"


class OutcomeKind(StrEnum):
    """Tag of a validation outcome."""

    VALID = "VALID"
    PARSE_FAILURE = "PARSE_FAILURE"
    EMPTY_BATCH = "EMPTY_BATCH"
    MISSING_FIELDS = "MISSING_FIELDS"


class Destination(StrEnum):
    """Where a routed document ends up."""

    STAGING = "staging"
    REJECTED = "rejected"


class StorageBackend(StrEnum):
    """Supported object store implementations."""

    S3 = "s3"
    LOCAL = "local"


# Required fields on every telemetry record, in declaration order.
REQUIRED_FIELDS: tuple[str, ...] = (
    "VehicleID",
    "latitude",
    "longitude",
    "City",
    "temperature",
    "speed",
)

# Same list as spelled by the legacy producers.
LEGACY_REQUIRED_FIELDS: tuple[str, ...] = (
    "VehicleID",
    "latitiude",
    "longitude",
    "City",
    "temeprature",
    "speed",
)
