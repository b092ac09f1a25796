"""Narrow gateway over an S3-compatible object store.

The rest of s3mgr talks to storage only through ``ObjectStoreGateway``:
list by prefix, get, put, delete and a size query. ``S3Gateway`` is the
boto3-backed implementation used by the CLI; tests substitute in-memory
fakes.

Failures are surfaced as ``GatewayError``. The message always carries the
HTTP status code when the store returned one, so callers can recognise a
missing object by the ``404`` in the message.
"""

from dataclasses import dataclass
from typing import Protocol

from botocore.exceptions import BotoCoreError, ClientError

from s3mgr.core import get_logger
from s3mgr.core.exceptions import GatewayError

from .clients import S3ClientManager

logger = get_logger(__name__)


@dataclass(frozen=True)
class ObjectEntry:
    """A listed object and its stored size in bytes."""

    key: str
    size: int


class ObjectStoreGateway(Protocol):
    """Protocol for the object store operations s3mgr relies on."""

    def list(self, prefix: str) -> list[ObjectEntry]:
        """Return every object whose key starts with ``prefix``."""
        ...

    def get(self, key: str) -> bytes:
        """Return the full body of an object."""
        ...

    def put(self, key: str, data: bytes) -> None:
        """Store ``data`` at ``key``, replacing any previous content."""
        ...

    def delete(self, key: str) -> None:
        """Delete an object."""
        ...

    def head_size(self, key: str) -> int:
        """Return the stored size of an object."""
        ...


def _gateway_error(operation: str, target: str, error: Exception) -> GatewayError:
    status_code = None
    if isinstance(error, ClientError):
        metadata = error.response.get("ResponseMetadata", {})
        status_code = metadata.get("HTTPStatusCode")

    if status_code is not None:
        message = f"{operation} failed for '{target}' (HTTP {status_code}): {error}"
    else:
        message = f"{operation} failed for '{target}': {error}"

    logger.error(message, operation=operation, error=str(error))
    return GatewayError(message, status_code=status_code)


class S3Gateway:
    """ObjectStoreGateway backed by a boto3 S3 client and a single bucket."""

    def __init__(self, client_manager: S3ClientManager, bucket: str):
        self.client_manager = client_manager
        self.bucket = bucket
        logger.info("S3 gateway initialized", bucket=bucket)

    def list(self, prefix: str) -> list[ObjectEntry]:
        try:
            client = self.client_manager.client
            entries = []

            # Use paginator to handle large numbers of objects
            paginator = client.get_paginator("list_objects_v2")
            page_iterator = paginator.paginate(Bucket=self.bucket, Prefix=prefix)

            for page in page_iterator:
                if "Contents" in page:
                    for obj in page["Contents"]:
                        entries.append(
                            ObjectEntry(key=obj["Key"], size=obj.get("Size", 0))
                        )

            logger.info(
                "S3 objects listed",
                bucket=self.bucket,
                prefix=prefix,
                object_count=len(entries),
            )
            return entries

        except (BotoCoreError, ClientError) as e:
            raise _gateway_error("ListObjects", prefix, e)

    def get(self, key: str) -> bytes:
        try:
            response = self.client_manager.client.get_object(
                Bucket=self.bucket, Key=key
            )
            data = response["Body"].read()
            logger.debug("S3 object fetched", key=key, size=len(data))
            return data
        except (BotoCoreError, ClientError) as e:
            raise _gateway_error("GetObject", key, e)

    def put(self, key: str, data: bytes) -> None:
        try:
            self.client_manager.client.put_object(
                Bucket=self.bucket, Key=key, Body=data
            )
            logger.debug("S3 object stored", key=key, size=len(data))
        except (BotoCoreError, ClientError) as e:
            raise _gateway_error("PutObject", key, e)

    def delete(self, key: str) -> None:
        try:
            self.client_manager.client.delete_object(Bucket=self.bucket, Key=key)
            logger.debug("S3 object deleted", key=key)
        except (BotoCoreError, ClientError) as e:
            raise _gateway_error("DeleteObject", key, e)

    def head_size(self, key: str) -> int:
        try:
            response = self.client_manager.client.head_object(
                Bucket=self.bucket, Key=key
            )
            return max(response.get("ContentLength", 0), 0)
        except (BotoCoreError, ClientError) as e:
            raise _gateway_error("HeadObject", key, e)
