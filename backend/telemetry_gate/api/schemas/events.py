"""
Request/response models for storage notifications and dry-run validation.

Storage notifications follow the S3 event shape that MinIO also emits:

    {"Records": [{"eventName": "s3:ObjectCreated:Put",
                  "s3": {"bucket": {"name": "input"},
                         "object": {"key": "landing%2Fv-001.json", "size": 512}}}]}

Object keys arrive URL-encoded.
"""

from __future__ import annotations

from typing import Any
from urllib.parse import unquote_plus

from pydantic import BaseModel, ConfigDict, Field


class S3Bucket(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str


class S3Object(BaseModel):
    model_config = ConfigDict(extra="ignore")

    key: str
    size: int | None = None

    @property
    def decoded_key(self) -> str:
        return unquote_plus(self.key)


class S3Entity(BaseModel):
    model_config = ConfigDict(extra="ignore")

    bucket: S3Bucket
    object: S3Object


class StorageEventRecord(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    event_name: str = Field(alias="eventName")
    s3: S3Entity

    @property
    def is_object_created(self) -> bool:
        # AWS: "ObjectCreated:Put"; MinIO: "s3:ObjectCreated:Put"
        return "ObjectCreated" in self.event_name


class StorageEventNotification(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    records: list[StorageEventRecord] = Field(default_factory=list, alias="Records")


class DispatchedDocument(BaseModel):
    document_name: str
    key: str
    task_id: str | None = None


class StorageEventResponse(BaseModel):
    dispatched: list[DispatchedDocument] = Field(default_factory=list)
    ignored: list[str] = Field(default_factory=list)


class VerdictResponse(BaseModel):
    """Dry-run verdict for a payload; nothing is written anywhere."""

    verdict: str
    destination: str
    reason: dict[str, Any] | None = None
    detail: str | None = None
