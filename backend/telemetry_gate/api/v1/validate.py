"""Dry-run validation — verdict for a posted payload, no storage access."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from telemetry_gate.api.deps import get_schema
from telemetry_gate.api.schemas.events import VerdictResponse
from telemetry_gate.validation.models import Schema
from telemetry_gate.validation.routing import evaluate

router = APIRouter(prefix="/validate", tags=["Validate"])


@router.post("", response_model=VerdictResponse)
async def validate_payload(
    request: Request,
    schema: Schema = Depends(get_schema),
) -> VerdictResponse:
    """Return the verdict the gate would give this exact body."""
    raw = await request.body()
    verdict = evaluate(raw, schema)
    return VerdictResponse(**verdict.to_dict())
