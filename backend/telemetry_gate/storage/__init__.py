from telemetry_gate.storage.keys import KeyLayout
from telemetry_gate.storage.object_store import (
    LocalObjectStore,
    ObjectStore,
    S3ObjectStore,
    build_object_store,
)

__all__ = ["KeyLayout", "ObjectStore", "S3ObjectStore", "LocalObjectStore", "build_object_store"]
