"""
Object key layout for the landing / staging / rejected areas.

    <landing_prefix><name>   document as it arrived
    <staging_prefix><name>   accepted copy
    <rejected_prefix><name>  dead-letter copy
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from telemetry_gate.core.constants import Destination


def _as_prefix(value: str) -> str:
    value = value.strip("/")
    return f"{value}/" if value else ""


@dataclass(frozen=True)
class KeyLayout:
    landing_prefix: str = "landing/"
    staging_prefix: str = "staging/"
    rejected_prefix: str = "rejected/"

    def __post_init__(self) -> None:
        for attr in ("landing_prefix", "staging_prefix", "rejected_prefix"):
            object.__setattr__(self, attr, _as_prefix(getattr(self, attr)))

    @classmethod
    def from_settings(cls, settings: Any) -> KeyLayout:
        return cls(
            landing_prefix=settings.LANDING_PREFIX,
            staging_prefix=settings.STAGING_PREFIX,
            rejected_prefix=settings.REJECTED_PREFIX,
        )

    def landing_key(self, name: str) -> str:
        return f"{self.landing_prefix}{name.lstrip('/')}"

    def destination_key(self, name: str, destination: Destination) -> str:
        prefix = (
            self.staging_prefix if destination == Destination.STAGING else self.rejected_prefix
        )
        return f"{prefix}{name.lstrip('/')}"

    def name_from_landing_key(self, key: str) -> str | None:
        """Strip the landing prefix; None if key isn't a landing document."""
        if not key.startswith(self.landing_prefix) or key.endswith("/"):
            return None
        name = key[len(self.landing_prefix):]
        return name or None
