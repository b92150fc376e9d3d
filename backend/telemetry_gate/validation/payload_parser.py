"""
Payload parser — raw document bytes to a Batch of records.

Producers emit either a single JSON object or an array of objects,
sometimes pretty-printed or newline-delimited.  Newlines are collapsed
before the strict parse.
"""

from __future__ import annotations

import json
import re

from telemetry_gate.validation.models import Batch, ParseFailure, ParseResult

# Surrounding whitespace, including a byte-order mark left by Windows tooling.
_EDGE_WHITESPACE = re.compile(r"^[\s\ufeff]+|[\s\ufeff]+$")


def normalize(text: str) -> str:
    """Trim surrounding whitespace and BOMs, turn every newline into a space."""
    return _EDGE_WHITESPACE.sub("", text).replace("\n", " ")


def _reject_constant(name: str) -> float:
    # NaN / Infinity / -Infinity are not JSON.
    raise ValueError(f"Invalid JSON literal: {name}")


def parse(raw: bytes) -> ParseResult:
    """
    Parse a document into a Batch.

    A top-level array is the batch; any other top-level value is a
    one-element batch.  Syntax, decoding and nesting-depth errors come
    back as ParseFailure, never as exceptions.
    """
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        return ParseFailure(f"payload is not UTF-8: {exc}")

    try:
        parsed = json.loads(normalize(text), parse_constant=_reject_constant)
    except ValueError as exc:
        # JSONDecodeError is a ValueError too
        return ParseFailure(str(exc))
    except RecursionError as exc:
        return ParseFailure(f"payload nested too deeply: {exc}")

    if isinstance(parsed, list):
        return Batch.of(parsed)
    return Batch.of([parsed])
