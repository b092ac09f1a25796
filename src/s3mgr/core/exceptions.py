"""Exception hierarchy for s3mgr.

Every error carries a ``kind`` so the CLI can report the failure category
alongside the human-readable message.
"""


class S3MgrError(Exception):
    """Base exception for all s3mgr errors."""

    kind = "error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(S3MgrError):
    """Raised when validation fails."""

    kind = "validation"


class InvalidSizeError(S3MgrError):
    """Raised when a human-readable size string cannot be parsed."""

    kind = "invalid_size"


class InvalidPathError(S3MgrError):
    """Raised when a path cannot be represented as text."""

    kind = "invalid_path"


class NotFoundError(S3MgrError):
    """Raised when an object is absent where existence is checked."""

    kind = "not_found"


class GatewayError(S3MgrError):
    """Raised for any transport, protocol or auth failure of the object store."""

    kind = "gateway"

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class EncodingError(S3MgrError):
    """Raised when object content is not valid UTF-8 text."""

    kind = "encoding"


class LocalIOError(S3MgrError):
    """Raised when reading or writing the local filesystem fails."""

    kind = "local_io"


class ConfigError(S3MgrError):
    """Raised when the persisted configuration cannot be read or written."""

    kind = "config"
