"""Transfers between the local filesystem and the object store.

Every operation here is a short sequence of gateway calls executed one at a
time. There are no retries and no rollback: the first error aborts the
operation and whatever already completed stays in place.

Uploads read the local file in ``chunk_size`` pieces and report cumulative
bytes read after each piece. The pieces are assembled and written with a
single put, so the stored object always holds the whole file.

Downloads fetch the whole object in one call and then write it locally in
``chunk_size`` pieces, reporting cumulative bytes written.
"""

import os
from pathlib import Path
from typing import Callable, Optional

from s3mgr.core import get_logger, get_tracer
from s3mgr.core.exceptions import (
    EncodingError,
    GatewayError,
    InvalidPathError,
    LocalIOError,
    NotFoundError,
    ValidationError,
)
from s3mgr.objectstorage.gateway import ObjectStoreGateway
from s3mgr.path.keys import (
    DELIMITER,
    compute_relative_path,
    join_destination,
    leaf_name,
    normalize_dir_prefix,
)

logger = get_logger(__name__)
tracer = get_tracer(__name__)

ProgressCallback = Callable[[int], None]
# Called before each file of a recursive transfer with (local path, key, size);
# may return a progress callback for that file.
FileHook = Callable[[Path, str, int], Optional[ProgressCallback]]


def _check_chunk_size(chunk_size: int) -> None:
    if chunk_size <= 0:
        raise ValidationError(f"Chunk size must be positive, got: {chunk_size}")


def upload_file(
    gateway: ObjectStoreGateway,
    local_path: Path,
    key: str,
    chunk_size: int,
    progress: Optional[ProgressCallback] = None,
) -> int:
    """Upload one local file to ``key``.

    Args:
        gateway: Object store to write to
        local_path: File to read
        key: Destination object key
        chunk_size: Read granularity in bytes
        progress: Called with cumulative bytes read after each chunk

    Returns:
        Number of bytes uploaded

    Raises:
        LocalIOError: If the local file cannot be read
        GatewayError: If the store rejects the write
    """
    _check_chunk_size(chunk_size)

    with tracer.start_as_current_span("upload_file") as span:
        span.set_attribute("s3mgr.key", key)
        chunks = []
        uploaded = 0

        try:
            with open(local_path, "rb") as f:
                while True:
                    chunk = f.read(chunk_size)
                    if not chunk:
                        break

                    chunks.append(chunk)
                    uploaded += len(chunk)
                    if progress is not None:
                        progress(uploaded)

                    if len(chunk) < chunk_size:
                        break
        except OSError as e:
            error_msg = f"Failed to read '{local_path}': {e}"
            logger.error(error_msg, error=str(e))
            raise LocalIOError(error_msg)

        gateway.put(key, b"".join(chunks))
        span.set_attribute("s3mgr.bytes", uploaded)

    logger.info("File uploaded", path=str(local_path), key=key, size=uploaded)
    return uploaded


def download_file(
    gateway: ObjectStoreGateway,
    key: str,
    local_path: Path,
    chunk_size: int,
    progress: Optional[ProgressCallback] = None,
) -> int:
    """Download ``key`` into ``local_path``.

    The whole body is held in memory; ``chunk_size`` only sets the local
    write granularity and the progress cadence.

    Returns:
        Number of bytes written
    """
    _check_chunk_size(chunk_size)

    with tracer.start_as_current_span("download_file") as span:
        span.set_attribute("s3mgr.key", key)
        data = gateway.get(key)
        downloaded = 0

        try:
            with open(local_path, "wb") as f:
                for offset in range(0, len(data), chunk_size):
                    chunk = data[offset : offset + chunk_size]
                    f.write(chunk)
                    downloaded += len(chunk)
                    if progress is not None:
                        progress(downloaded)
        except OSError as e:
            error_msg = f"Failed to write '{local_path}': {e}"
            logger.error(error_msg, error=str(e))
            raise LocalIOError(error_msg)

        span.set_attribute("s3mgr.bytes", downloaded)

    logger.info("File downloaded", key=key, path=str(local_path), size=downloaded)
    return downloaded


def resolve_upload_key(local_path: Path, destination: Optional[str]) -> str:
    """Destination key for uploading ``local_path`` (file or directory)."""
    name = os.path.basename(os.path.abspath(local_path))
    if destination is None:
        return name
    return join_destination(destination, name)


def resolve_download_path(key: str, destination: str = ".") -> Path:
    """Local path for downloading a single object.

    ``"."`` means "current directory under the object's own name"; an
    existing local directory receives the object under its own name; any
    other destination is used as the literal file path.
    """
    file_name = key.split(DELIMITER)[-1]
    if destination == ".":
        return Path(file_name)

    target = Path(destination)
    if target.is_dir():
        return target / file_name
    return target


def upload_directory(
    gateway: ObjectStoreGateway,
    local_dir: Path,
    destination: Optional[str],
    chunk_size: int,
    on_file: Optional[FileHook] = None,
) -> list[str]:
    """Upload a local directory tree depth-first, one file at a time.

    The remote base is ``resolve_upload_key(local_dir, destination)``. Each
    directory level gets a zero-byte marker at ``prefix/``.

    Returns:
        Keys written, in the order they were written
    """
    _check_chunk_size(chunk_size)
    base = resolve_upload_key(local_dir, destination).rstrip(DELIMITER)

    logger.info("Uploading directory", path=str(local_dir), base=base)
    written: list[str] = []

    with tracer.start_as_current_span("upload_directory") as span:
        span.set_attribute("s3mgr.base", base)
        _upload_tree(gateway, Path(local_dir), base, "", chunk_size, on_file, written)

    logger.info("Directory uploaded", path=str(local_dir), keys=len(written))
    return written


def _upload_tree(
    gateway: ObjectStoreGateway,
    dir_path: Path,
    base: str,
    relative_path: str,
    chunk_size: int,
    on_file: Optional[FileHook],
    written: list[str],
) -> None:
    prefix = DELIMITER.join(part for part in (base, relative_path) if part)

    try:
        entries = sorted(dir_path.iterdir(), key=lambda p: p.name)
    except OSError as e:
        error_msg = f"Failed to read directory '{dir_path}': {e}"
        logger.error(error_msg, error=str(e))
        raise LocalIOError(error_msg)

    if prefix:
        marker = prefix + DELIMITER
        gateway.put(marker, b"")
        written.append(marker)

    for entry in entries:
        if entry.is_dir():
            next_relative = (
                f"{relative_path}{DELIMITER}{entry.name}"
                if relative_path
                else entry.name
            )
            _upload_tree(
                gateway, entry, base, next_relative, chunk_size, on_file, written
            )
        else:
            key = f"{prefix}{DELIMITER}{entry.name}" if prefix else entry.name
            try:
                size = entry.stat().st_size
            except OSError as e:
                error_msg = f"Failed to stat '{entry}': {e}"
                logger.error(error_msg, error=str(e))
                raise LocalIOError(error_msg)

            progress = on_file(entry, key, size) if on_file is not None else None
            upload_file(gateway, entry, key, chunk_size, progress)
            written.append(key)


def download_directory(
    gateway: ObjectStoreGateway,
    source: str,
    destination: str,
    chunk_size: int,
    on_file: Optional[FileHook] = None,
) -> list[Path]:
    """Download every object under ``source`` into ``destination/<leaf>``.

    Uses a single listing. Directory markers become local directories and
    are otherwise skipped. Objects are downloaded one after another.

    Returns:
        Local files written
    """
    _check_chunk_size(chunk_size)
    source_name = leaf_name(source)
    root = Path(destination) / source_name
    entries = gateway.list(normalize_dir_prefix(source))

    logger.info("Downloading directory", source=source, objects=len(entries))
    written: list[Path] = []

    with tracer.start_as_current_span("download_directory") as span:
        span.set_attribute("s3mgr.source", source)

        for entry in entries:
            relative = compute_relative_path(source, entry.key)
            local_path = root / relative if relative else root
            _check_within(root, local_path)

            try:
                if entry.key.endswith(DELIMITER):
                    local_path.mkdir(parents=True, exist_ok=True)
                    continue
                local_path.parent.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                error_msg = f"Failed to create directory for '{local_path}': {e}"
                logger.error(error_msg, error=str(e))
                raise LocalIOError(error_msg)

            size = gateway.head_size(entry.key)
            progress = (
                on_file(local_path, entry.key, size) if on_file is not None else None
            )
            download_file(gateway, entry.key, local_path, chunk_size, progress)
            written.append(local_path)

    logger.info("Directory downloaded", source=source, files=len(written))
    return written


def _check_within(root: Path, local_path: Path) -> None:
    resolved_root = os.path.abspath(root)
    resolved = os.path.abspath(local_path)
    if os.path.commonpath([resolved_root, resolved]) != resolved_root:
        raise InvalidPathError(f"Object key escapes destination: {local_path}")


def make_directory(gateway: ObjectStoreGateway, path: str) -> str:
    """Create a directory marker for ``path`` and return its key."""
    key = normalize_dir_prefix(path)
    if not key:
        raise ValidationError("Directory path cannot be empty")
    gateway.put(key, b"")
    logger.info("Directory created", key=key)
    return key


def copy_object(gateway: ObjectStoreGateway, source: str, destination: str) -> None:
    """Copy by fetching the full body and writing it to ``destination``."""
    with tracer.start_as_current_span("copy_object"):
        data = gateway.get(source)
        gateway.put(destination, data)
    logger.info("Object copied", source=source, destination=destination)


def move_object(gateway: ObjectStoreGateway, source: str, destination: str) -> None:
    """Copy then delete the source.

    Not atomic: if the delete fails both copies remain.
    """
    with tracer.start_as_current_span("move_object"):
        data = gateway.get(source)
        gateway.put(destination, data)
        gateway.delete(source)
    logger.info("Object moved", source=source, destination=destination)


def remove(
    gateway: ObjectStoreGateway, path: str, recursive: bool = False
) -> list[str]:
    """Delete ``path``, or everything under it when ``recursive``.

    Recursive removal lists the prefix once and deletes keys one by one;
    the first failed delete aborts the rest. A recursive remove of a path
    with nothing under it deletes the key itself.

    Returns:
        Keys deleted
    """
    if not recursive:
        gateway.delete(path)
        logger.info("Object removed", key=path)
        return [path]

    keys = [entry.key for entry in gateway.list(normalize_dir_prefix(path))]
    if not keys:
        keys = [path]

    removed = []
    for key in keys:
        gateway.delete(key)
        removed.append(key)

    logger.info("Prefix removed", path=path, keys=len(removed))
    return removed


def stat_object(gateway: ObjectStoreGateway, key: str) -> int:
    """Return the stored size of ``key``.

    Raises:
        NotFoundError: If the store answers 404 for the key
        GatewayError: For any other failure
    """
    try:
        return gateway.head_size(key)
    except GatewayError as e:
        if "404" in str(e):
            raise NotFoundError(f"Object not found: {key}")
        raise


def object_exists(gateway: ObjectStoreGateway, key: str) -> bool:
    """Check for an object; a 404 response means it does not exist.

    Any other failure propagates.
    """
    try:
        stat_object(gateway, key)
    except NotFoundError:
        return False
    return True


def read_text(gateway: ObjectStoreGateway, key: str) -> str:
    """Fetch an object and decode it as UTF-8.

    Raises:
        EncodingError: If the body is not valid UTF-8
    """
    data = gateway.get(key)
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise EncodingError(f"'{key}' is not valid UTF-8 text: {e}")
