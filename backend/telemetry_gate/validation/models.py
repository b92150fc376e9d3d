"""
Value objects for the validation gate.

Everything here is frozen: a Batch, an outcome and a verdict are built
once per document and never mutated, so evaluating the same bytes twice
yields objects that compare equal.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from collections.abc import Iterable, Mapping
from typing import Any, Union

from telemetry_gate.core.constants import (
    LEGACY_REQUIRED_FIELDS,
    REQUIRED_FIELDS,
    Destination,
    OutcomeKind,
)

Record = Mapping[str, Any]


# ═══════════════════════════════════════════════════════════
#  Schema
# ═══════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Schema:
    """Ordered set of field names every record must contain."""

    required_fields: tuple[str, ...] = REQUIRED_FIELDS

    def __post_init__(self) -> None:
        # Accept any iterable, store a tuple, drop duplicates keeping order.
        object.__setattr__(
            self, "required_fields", tuple(dict.fromkeys(self.required_fields))
        )

    @classmethod
    def default(cls) -> Schema:
        return cls(REQUIRED_FIELDS)

    @classmethod
    def legacy(cls) -> Schema:
        """Schema with the field spellings emitted by legacy producers."""
        return cls(LEGACY_REQUIRED_FIELDS)

    @classmethod
    def from_settings(cls, legacy_spelling: bool) -> Schema:
        return cls.legacy() if legacy_spelling else cls.default()

    def missing_from(self, record: Any) -> tuple[str, ...]:
        """Return schema fields absent from the record's keys, in schema order."""
        keys = record.keys() if isinstance(record, Mapping) else ()
        return tuple(f for f in self.required_fields if f not in keys)


# ═══════════════════════════════════════════════════════════
#  Batch
# ═══════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Batch:
    """Ordered records parsed from one document."""

    records: tuple[Any, ...] = ()

    @classmethod
    def of(cls, records: Iterable[Any]) -> Batch:
        return cls(tuple(records))

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self):
        return iter(self.records)

    @property
    def is_empty(self) -> bool:
        return not self.records


# ═══════════════════════════════════════════════════════════
#  Validation outcomes
# ═══════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Valid:
    kind: OutcomeKind = field(default=OutcomeKind.VALID, init=False)

    def describe(self) -> str:
        return "all records conform"

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind}


@dataclass(frozen=True)
class ParseFailure:
    message: str
    kind: OutcomeKind = field(default=OutcomeKind.PARSE_FAILURE, init=False)

    def describe(self) -> str:
        return f"payload is not valid JSON: {self.message}"

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "message": self.message}


@dataclass(frozen=True)
class EmptyBatch:
    kind: OutcomeKind = field(default=OutcomeKind.EMPTY_BATCH, init=False)

    def describe(self) -> str:
        return "JSON array is empty"

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind}


@dataclass(frozen=True)
class MissingFields:
    record_index: int
    missing_fields: tuple[str, ...]
    kind: OutcomeKind = field(default=OutcomeKind.MISSING_FIELDS, init=False)

    def describe(self) -> str:
        return (
            f"Record[{self.record_index}] missing fields: "
            f"{', '.join(self.missing_fields)}"
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind,
            "record_index": self.record_index,
            "missing_fields": list(self.missing_fields),
        }


ValidationOutcome = Union[Valid, ParseFailure, EmptyBatch, MissingFields]
RejectionReason = Union[ParseFailure, EmptyBatch, MissingFields]
ParseResult = Union[Batch, ParseFailure]


# ═══════════════════════════════════════════════════════════
#  Verdicts
# ═══════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Accepted:
    """Every record conforms; the document goes to staging."""

    @property
    def accepted(self) -> bool:
        return True

    @property
    def destination(self) -> Destination:
        return Destination.STAGING

    def to_dict(self) -> dict[str, Any]:
        return {"verdict": "ACCEPTED", "destination": self.destination}


@dataclass(frozen=True)
class Rejected:
    """The document goes to the dead-letter area, with the reason why."""

    reason: RejectionReason

    @property
    def accepted(self) -> bool:
        return False

    @property
    def destination(self) -> Destination:
        return Destination.REJECTED

    def to_dict(self) -> dict[str, Any]:
        return {
            "verdict": "REJECTED",
            "destination": self.destination,
            "reason": self.reason.to_dict(),
            "detail": self.reason.describe(),
        }


RouteVerdict = Union[Accepted, Rejected]
