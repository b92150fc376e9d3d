from telemetry_gate.api.schemas.events import (
    DispatchedDocument,
    StorageEventNotification,
    StorageEventRecord,
    StorageEventResponse,
    VerdictResponse,
)

__all__ = [
    "DispatchedDocument",
    "StorageEventNotification",
    "StorageEventRecord",
    "StorageEventResponse",
    "VerdictResponse",
]
