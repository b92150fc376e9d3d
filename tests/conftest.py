import json
from typing import Any, Callable

import pytest

from telemetry_gate.storage.keys import KeyLayout
from telemetry_gate.storage.object_store import LocalObjectStore


@pytest.fixture
def good_record() -> dict[str, Any]:
    return {
        "VehicleID": "V1",
        "latitude": 1,
        "longitude": 2,
        "City": "X",
        "temperature": 20,
        "speed": 30,
    }


@pytest.fixture
def as_bytes() -> Callable[[Any], bytes]:
    def _encode(obj: Any) -> bytes:
        return json.dumps(obj).encode("utf-8")

    return _encode


@pytest.fixture
def layout() -> KeyLayout:
    return KeyLayout()


@pytest.fixture
def local_store(tmp_path) -> LocalObjectStore:
    """Empty directory-backed bucket."""
    return LocalObjectStore(str(tmp_path / "bucket"))


@pytest.fixture
def land(local_store, layout) -> Callable[[str, bytes], str]:
    """Drop a document into the landing area, return its name."""

    def _land(name: str, payload: bytes) -> str:
        local_store.put_bytes(layout.landing_key(name), payload)
        return name

    return _land
