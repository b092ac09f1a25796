"""Listing of objects under a prefix, prepared for display."""

import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from s3mgr.core import get_logger
from s3mgr.objectstorage.gateway import ObjectEntry, ObjectStoreGateway
from s3mgr.path.keys import DELIMITER, normalize_dir_prefix

logger = get_logger(__name__)


@dataclass(frozen=True)
class ListingEntry:
    """One row of a listing.

    Attributes:
        name: Full object key
        size: Size in bytes (0 for directory markers)
        is_dir: True for directory markers (keys ending in ``/``)
    """

    name: str
    size: int
    is_dir: bool


@dataclass(frozen=True)
class ListingSummary:
    """Totals printed under a listing."""

    total_bytes: int
    file_count: int
    dir_count: int


class _Counter:
    """Monotonic counter shared by the sizing workers."""

    def __init__(self) -> None:
        self._value = 0
        self._lock = threading.Lock()

    def increment(self, on_change: Optional[Callable[[int], None]] = None) -> int:
        with self._lock:
            self._value += 1
            if on_change is not None:
                on_change(self._value)
            return self._value


def _describe(entry: ObjectEntry) -> ListingEntry:
    is_dir = entry.key.endswith(DELIMITER)
    return ListingEntry(name=entry.key, size=0 if is_dir else entry.size, is_dir=is_dir)


def describe_entries(
    entries: Iterable[ObjectEntry],
    on_progress: Optional[Callable[[int], None]] = None,
) -> list[ListingEntry]:
    """Size listed entries concurrently and sort them for display.

    ``on_progress`` receives the number of entries sized so far. It may be
    called from worker threads, but always with a strictly increasing count.
    Directories sort before files; each group is ordered by name.
    """
    counter = _Counter()

    def size_entry(entry: ObjectEntry) -> ListingEntry:
        described = _describe(entry)
        counter.increment(on_progress)
        return described

    entries = list(entries)
    if not entries:
        return []

    with ThreadPoolExecutor(max_workers=min(32, len(entries))) as executor:
        described = list(executor.map(size_entry, entries))

    return sorted(described, key=lambda item: (not item.is_dir, item.name))


def summarize(entries: Iterable[ListingEntry]) -> ListingSummary:
    """Count files and directory markers and add up their sizes."""
    total_bytes = 0
    file_count = 0
    dir_count = 0
    for entry in entries:
        total_bytes += entry.size
        if entry.is_dir:
            dir_count += 1
        else:
            file_count += 1
    return ListingSummary(
        total_bytes=total_bytes, file_count=file_count, dir_count=dir_count
    )


def list_prefix(
    gateway: ObjectStoreGateway, path: Optional[str] = None
) -> list[ObjectEntry]:
    """List every object under ``path`` treated as a directory prefix.

    Args:
        gateway: Object store to query
        path: Directory-like path; ``None`` or empty lists the whole bucket

    Returns:
        Entries as returned by the store
    """
    prefix = normalize_dir_prefix(path or "")
    logger.info("Listing prefix", prefix=prefix)
    return gateway.list(prefix)
