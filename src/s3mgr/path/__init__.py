"""Key path and size helpers."""

from .keys import (
    compute_relative_path,
    ensure_text_path,
    is_directory,
    join_destination,
    leaf_name,
    normalize_dir_prefix,
)
from .sizes import format_human_size, parse_human_size

__all__ = [
    "compute_relative_path",
    "ensure_text_path",
    "format_human_size",
    "is_directory",
    "join_destination",
    "leaf_name",
    "normalize_dir_prefix",
    "parse_human_size",
]
