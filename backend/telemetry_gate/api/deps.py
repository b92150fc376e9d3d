"""Shared dependencies for API routes."""

from __future__ import annotations

from telemetry_gate.core.config import settings
from telemetry_gate.storage.keys import KeyLayout
from telemetry_gate.validation.models import Schema


def get_key_layout() -> KeyLayout:
    """Landing / staging / rejected prefixes from settings."""
    return KeyLayout.from_settings(settings)


def get_schema() -> Schema:
    """Required-field schema selected by settings."""
    return Schema.from_settings(settings.LEGACY_FIELD_SPELLING)


def get_bucket_name() -> str:
    return settings.STORAGE_BUCKET_NAME
