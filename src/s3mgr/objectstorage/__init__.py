"""Object storage access for S3-compatible services."""

from .clients import S3ClientConfig, S3ClientManager
from .gateway import ObjectEntry, ObjectStoreGateway, S3Gateway
from .listing import (
    ListingEntry,
    ListingSummary,
    describe_entries,
    list_prefix,
    summarize,
)

__all__ = [
    "ListingEntry",
    "ListingSummary",
    "ObjectEntry",
    "ObjectStoreGateway",
    "S3ClientConfig",
    "S3ClientManager",
    "S3Gateway",
    "describe_entries",
    "list_prefix",
    "summarize",
]
