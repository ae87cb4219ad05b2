from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Protocol

import boto3
from boto3.exceptions import S3UploadFailedError
from botocore.exceptions import BotoCoreError, ClientError

from ..core.exceptions import StorageError

logger = logging.getLogger(__name__)


class ObjectStorage(Protocol):
    """Object storage gateway: stores bytes and returns a stable URI."""

    def put(self, key: str, data: bytes, content_type: str) -> str:
        raise NotImplementedError

    def delete(self, key: str) -> None:
        """Best-effort removal; failures are logged, not raised."""
        raise NotImplementedError


@dataclass(frozen=True)
class StorageConfig:
    bucket: str
    region: Optional[str] = None
    access_key: Optional[str] = None
    secret_key: Optional[str] = None
    endpoint_url: Optional[str] = None
    public_base_url: Optional[str] = None
    acl: Optional[str] = "public-read"

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "StorageConfig":
        return cls(
            bucket=str(data["bucket"]),
            region=data.get("region") or None,
            access_key=data.get("access_key") or None,
            secret_key=data.get("secret_key") or None,
            endpoint_url=data.get("endpoint_url") or None,
            public_base_url=data.get("public_base_url") or None,
            acl=data.get("acl", "public-read") or None,
        )

    def object_uri(self, key: str) -> str:
        if self.public_base_url:
            return f"{self.public_base_url.rstrip('/')}/{key}"
        if self.endpoint_url:
            # path-style, as served by MinIO / localstack
            return f"{self.endpoint_url.rstrip('/')}/{self.bucket}/{key}"
        return f"https://{self.bucket}.s3.amazonaws.com/{key}"


def make_s3_client(config: StorageConfig):
    return boto3.client(
        "s3",
        aws_access_key_id=config.access_key,
        aws_secret_access_key=config.secret_key,
        region_name=config.region,
        endpoint_url=config.endpoint_url,
    )


class S3ObjectStorage(ObjectStorage):
    """S3 gateway (AWS or any S3-compatible endpoint) backed by boto3."""

    def __init__(self, config: StorageConfig, client=None):
        self._config = config
        self._client = client or make_s3_client(config)

    def put(self, key: str, data: bytes, content_type: str) -> str:
        extra = {"ContentType": content_type}
        if self._config.acl:
            extra["ACL"] = self._config.acl

        try:
            self._client.upload_fileobj(io.BytesIO(data), self._config.bucket, key, ExtraArgs=extra)
        except (BotoCoreError, ClientError, S3UploadFailedError) as exc:
            logger.exception("Upload of %s to bucket %s failed", key, self._config.bucket)
            raise StorageError("Failed to upload file") from exc
        return self._config.object_uri(key)

    def delete(self, key: str) -> None:
        try:
            self._client.delete_object(Bucket=self._config.bucket, Key=key)
        except (BotoCoreError, ClientError):
            logger.exception("Object %s left orphaned in bucket %s", key, self._config.bucket)
