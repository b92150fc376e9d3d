"""
Storage notification endpoint — the trigger for gate runs.

Point the bucket's event notification (MinIO webhook target, S3 → SNS
HTTP subscription, etc.) at POST /api/v1/events/storage.  Every new
object under the landing prefix becomes one validate_document task.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from telemetry_gate.api.deps import get_bucket_name, get_key_layout
from telemetry_gate.api.schemas.events import (
    DispatchedDocument,
    StorageEventNotification,
    StorageEventResponse,
)
from telemetry_gate.core.logging import get_logger
from telemetry_gate.storage.keys import KeyLayout

logger = get_logger(__name__)

router = APIRouter(prefix="/events", tags=["Events"])


@router.post("/storage", response_model=StorageEventResponse)
async def receive_storage_event(
    notification: StorageEventNotification,
    layout: KeyLayout = Depends(get_key_layout),
    bucket_name: str = Depends(get_bucket_name),
) -> StorageEventResponse:
    """Dispatch one gate task per newly created landing document."""
    from telemetry_gate.tasks.gate_tasks import validate_document

    response = StorageEventResponse()

    for record in notification.records:
        key = record.s3.object.decoded_key

        if not record.is_object_created or record.s3.bucket.name != bucket_name:
            response.ignored.append(key)
            continue

        document_name = layout.name_from_landing_key(key)
        if document_name is None:
            response.ignored.append(key)
            continue

        task = validate_document.delay(document_name)
        response.dispatched.append(
            DispatchedDocument(document_name=document_name, key=key, task_id=task.id)
        )
        logger.info(
            "Gate task dispatched",
            document_name=document_name,
            key=key,
            task_id=task.id,
        )

    if response.ignored:
        logger.debug("Storage events ignored", keys=response.ignored)

    return response
