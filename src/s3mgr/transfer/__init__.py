"""Uploads, downloads and object manipulation over the gateway."""

from .engine import (
    copy_object,
    download_directory,
    download_file,
    make_directory,
    move_object,
    object_exists,
    read_text,
    remove,
    resolve_download_path,
    resolve_upload_key,
    stat_object,
    upload_directory,
    upload_file,
)

__all__ = [
    "copy_object",
    "download_directory",
    "download_file",
    "make_directory",
    "move_object",
    "object_exists",
    "read_text",
    "remove",
    "resolve_download_path",
    "resolve_upload_key",
    "stat_object",
    "upload_directory",
    "upload_file",
]
