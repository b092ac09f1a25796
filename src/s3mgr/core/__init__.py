"""Core utilities and shared components for s3mgr."""

from .config import settings
from .exceptions import S3MgrError, ValidationError
from .observability import get_logger, get_tracer, set_log_level

__all__ = [
    "settings",
    "S3MgrError",
    "ValidationError",
    "get_logger",
    "get_tracer",
    "set_log_level",
]
