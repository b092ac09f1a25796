"""Object storage listing operations."""

from .prefix_contents import (
    ListingEntry,
    ListingSummary,
    describe_entries,
    list_prefix,
    summarize,
)

__all__ = [
    "ListingEntry",
    "ListingSummary",
    "describe_entries",
    "list_prefix",
    "summarize",
]
