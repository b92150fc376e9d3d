"""
Routing decision — folds parser and validator results into one verdict.
"""

from __future__ import annotations

from telemetry_gate.validation.models import (
    Accepted,
    EmptyBatch,
    ParseFailure,
    ParseResult,
    Rejected,
    RouteVerdict,
    Schema,
    Valid,
    ValidationOutcome,
)
from telemetry_gate.validation.payload_parser import parse
from telemetry_gate.validation.schema_validator import validate


def decide(
    parse_result: ParseResult,
    outcome: ValidationOutcome | None = None,
) -> RouteVerdict:
    """
    Map a parse result and validation outcome to Accepted / Rejected.

    A ParseFailure wins regardless of ``outcome``.  A missing outcome
    after a successful parse is treated as not validated and rejected
    as an empty batch would be, so the function stays total.
    """
    if isinstance(parse_result, ParseFailure):
        return Rejected(parse_result)
    if isinstance(outcome, Valid):
        return Accepted()
    if outcome is None:
        return Rejected(EmptyBatch())
    return Rejected(outcome)


def evaluate(raw: bytes, schema: Schema | None = None) -> RouteVerdict:
    """Run parse → validate → decide on one document."""
    schema = schema or Schema.default()
    parsed = parse(raw)
    if isinstance(parsed, ParseFailure):
        return decide(parsed)
    return decide(parsed, validate(parsed, schema))
