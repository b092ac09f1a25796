"""A command-line client for S3-compatible object storage.

This package emulates directories over a flat object-key namespace and
provides list, make-directory, move, copy, remove, upload, download and
show-contents operations, plus local configuration of credentials and
default transfer chunk sizes.

Key Features:
    - Directory emulation over key prefixes
    - Recursive upload and download of directory trees
    - Human-readable chunk sizes ("5M", "512K")
    - TOML configuration store
    - CLI interface

Recommended Usage:
    >>> from s3mgr import ConfigStore, open_gateway, upload_directory
    >>> gateway = open_gateway(ConfigStore().load())
    >>> upload_directory(gateway, "photos", "backup/", chunk_size=2 * 1024 * 1024)

Advanced Usage:
    Import specific modules for lower-level operations:

    >>> from s3mgr.path import join_destination, normalize_dir_prefix
    >>> from s3mgr.objectstorage import S3Gateway, S3ClientConfig
"""

__version__ = "0.1.0"

from .core.exceptions import ValidationError
from .objectstorage import (
    ListingEntry,
    ObjectEntry,
    ObjectStoreGateway,
    S3ClientConfig,
    S3ClientManager,
    S3Gateway,
    describe_entries,
    list_prefix,
)
from .path import (
    compute_relative_path,
    format_human_size,
    is_directory,
    join_destination,
    normalize_dir_prefix,
    parse_human_size,
)
from .schemas import AppConfig, S3Config
from .storage_config import ConfigStore
from .transfer import (
    copy_object,
    download_directory,
    download_file,
    make_directory,
    move_object,
    object_exists,
    read_text,
    remove,
    stat_object,
    upload_directory,
    upload_file,
)


def open_gateway(config: AppConfig) -> S3Gateway:
    """Create a gateway for the bucket named in ``config``.

    Raises:
        ValidationError: If no bucket is configured
    """
    if not config.s3.bucket:
        raise ValidationError(
            "No bucket configured. Run 's3mgr config -b <bucket>' first."
        )
    client_manager = S3ClientManager(S3ClientConfig.from_app_config(config))
    return S3Gateway(client_manager, config.s3.bucket)


__all__ = [
    # Configuration
    "AppConfig",
    "ConfigStore",
    "S3Config",
    # Object storage
    "ListingEntry",
    "ObjectEntry",
    "ObjectStoreGateway",
    "S3ClientConfig",
    "S3ClientManager",
    "S3Gateway",
    "describe_entries",
    "list_prefix",
    "open_gateway",
    # Key paths and sizes
    "compute_relative_path",
    "format_human_size",
    "is_directory",
    "join_destination",
    "normalize_dir_prefix",
    "parse_human_size",
    # Transfers
    "copy_object",
    "download_directory",
    "download_file",
    "make_directory",
    "move_object",
    "object_exists",
    "read_text",
    "remove",
    "stat_object",
    "upload_directory",
    "upload_file",
]
