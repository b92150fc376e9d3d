"""
Object store access — read landing documents, write routed copies.

Two implementations share one small interface:

    S3ObjectStore     — any S3-compatible endpoint via boto3 (MinIO in dev)
    LocalObjectStore  — a directory on disk standing in for the bucket

Steps only ever call get_bytes() and put_bytes(); neither rewrites the
payload.
"""

from __future__ import annotations

import os
from abc import ABC, abstractmethod
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from telemetry_gate.core.constants import StorageBackend
from telemetry_gate.core.logging import get_logger
from telemetry_gate.pipeline.errors import DocumentNotFoundError, StorageError

logger = get_logger(__name__)

_NOT_FOUND_CODES = {"NoSuchKey", "404", "NotFound"}


class ObjectStore(ABC):
    """Minimal byte-level access to one bucket."""

    bucket: str

    @abstractmethod
    def get_bytes(self, key: str) -> bytes:
        """Return the object's bytes.  Raises DocumentNotFoundError / StorageError."""
        ...

    @abstractmethod
    def put_bytes(self, key: str, data: bytes, content_type: str = "application/json") -> None:
        """Write bytes to key, replacing any existing object.  Raises StorageError."""
        ...


class S3ObjectStore(ObjectStore):
    """boto3-backed store for MinIO / S3."""

    def __init__(self, bucket: str, client: Any = None, **client_kwargs: Any) -> None:
        self.bucket = bucket
        self.client = client or boto3.client("s3", **client_kwargs)

    def get_bytes(self, key: str) -> bytes:
        try:
            response = self.client.get_object(Bucket=self.bucket, Key=key)
            return response["Body"].read()
        except ClientError as exc:
            code = str(exc.response.get("Error", {}).get("Code", ""))
            if code in _NOT_FOUND_CODES:
                raise DocumentNotFoundError(
                    f"s3://{self.bucket}/{key} does not exist",
                    details={"bucket": self.bucket, "key": key},
                ) from exc
            raise StorageError(
                f"Failed to read s3://{self.bucket}/{key}: {exc}",
                details={"bucket": self.bucket, "key": key, "code": code},
            ) from exc
        except BotoCoreError as exc:
            raise StorageError(
                f"Failed to read s3://{self.bucket}/{key}: {exc}",
                details={"bucket": self.bucket, "key": key},
            ) from exc

    def put_bytes(self, key: str, data: bytes, content_type: str = "application/json") -> None:
        try:
            self.client.put_object(
                Bucket=self.bucket,
                Key=key,
                Body=data,
                ContentType=content_type,
            )
        except (ClientError, BotoCoreError) as exc:
            raise StorageError(
                f"Failed to write s3://{self.bucket}/{key}: {exc}",
                details={"bucket": self.bucket, "key": key},
            ) from exc


class LocalObjectStore(ObjectStore):
    """Directory-backed store.  Keys are relative paths under root."""

    def __init__(self, root: str) -> None:
        self.root = os.path.abspath(root)
        self.bucket = self.root

    def _path(self, key: str) -> str:
        path = os.path.abspath(os.path.join(self.root, key))
        if os.path.commonpath([self.root, path]) != self.root:
            raise StorageError(f"Key escapes store root: {key}", details={"key": key})
        return path

    def get_bytes(self, key: str) -> bytes:
        path = self._path(key)
        if not os.path.isfile(path):
            raise DocumentNotFoundError(f"{path} does not exist", details={"key": key})
        try:
            with open(path, "rb") as f:
                return f.read()
        except OSError as exc:
            raise StorageError(f"Failed to read {path}: {exc}", details={"key": key}) from exc

    def put_bytes(self, key: str, data: bytes, content_type: str = "application/json") -> None:
        path = self._path(key)
        tmp_path = f"{path}.tmp"
        try:
            os.makedirs(os.path.dirname(path), exist_ok=True)
            with open(tmp_path, "wb") as f:
                f.write(data)
            os.replace(tmp_path, path)
        except OSError as exc:
            raise StorageError(f"Failed to write {path}: {exc}", details={"key": key}) from exc


def build_object_store(settings: Any) -> ObjectStore:
    """Construct the store selected by settings.STORAGE_BACKEND."""
    backend = settings.STORAGE_BACKEND
    if backend == StorageBackend.LOCAL:
        logger.info("Using local object store", root=settings.STORAGE_LOCAL_ROOT)
        return LocalObjectStore(settings.STORAGE_LOCAL_ROOT)
    if backend == StorageBackend.S3:
        return S3ObjectStore(
            bucket=settings.STORAGE_BUCKET_NAME,
            endpoint_url=settings.STORAGE_ENDPOINT or None,
            aws_access_key_id=settings.STORAGE_ACCESS_KEY,
            aws_secret_access_key=settings.STORAGE_SECRET_KEY,
            region_name=settings.STORAGE_REGION,
        )
    raise StorageError(f"Unknown storage backend: {backend!r}")
