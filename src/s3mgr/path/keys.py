"""Directory emulation over a flat object-key namespace.

Object stores have no directories. A key ending in ``/`` is treated as a
directory marker, and a path counts as a directory whenever the listing
under its normalized prefix is non-empty ("has children"), whether or not a
marker object exists.

Examples:
    >>> normalize_dir_prefix("a/b")
    'a/b/'
    >>> compute_relative_path("photos", "photos/2020/a.jpg")
    '2020/a.jpg'
    >>> join_destination("backup/", "file.txt")
    'backup/file.txt'
    >>> join_destination("backup", "file.txt")
    'backup'
"""

from typing import TYPE_CHECKING

from s3mgr.core import get_logger
from s3mgr.core.exceptions import InvalidPathError

if TYPE_CHECKING:
    from s3mgr.objectstorage.gateway import ObjectStoreGateway

logger = get_logger(__name__)

DELIMITER = "/"


def normalize_dir_prefix(path: str) -> str:
    """Append a trailing delimiter; the empty path stays the root prefix."""
    if not path or path.endswith(DELIMITER):
        return path
    return path + DELIMITER


def is_directory(gateway: "ObjectStoreGateway", path: str) -> bool:
    """Return True if any object exists under the normalized prefix of ``path``."""
    prefix = normalize_dir_prefix(path)
    entries = gateway.list(prefix)
    logger.debug("Directory check", prefix=prefix, children=len(entries))
    return len(entries) > 0


def compute_relative_path(base_key: str, child_key: str) -> str:
    """Strip ``base_key`` from the front of ``child_key`` and drop leading slashes."""
    if child_key.startswith(base_key):
        child_key = child_key[len(base_key) :]
    return child_key.lstrip(DELIMITER)


def join_destination(base: str, leaf: str) -> str:
    """Resolve a destination key for ``leaf``.

    An empty or slash-terminated ``base`` is a folder and ``leaf`` is
    appended to it. Any other ``base`` is taken verbatim as the full key,
    which lets one parameter express both "upload into folder" and
    "upload and rename".
    """
    if not base or base.endswith(DELIMITER):
        return base + leaf
    return base


def leaf_name(key: str) -> str:
    """Return the last non-empty segment of a key (``"a/b/"`` -> ``"b"``)."""
    return key.rstrip(DELIMITER).split(DELIMITER)[-1]


def ensure_text_path(path: str) -> str:
    """Reject paths that cannot be represented as UTF-8 text.

    Command-line arguments with undecodable bytes arrive as strings holding
    surrogate escapes; those cannot be used as object keys.

    Raises:
        InvalidPathError: If the path is not encodable as UTF-8
    """
    try:
        path.encode("utf-8")
    except UnicodeEncodeError:
        raise InvalidPathError(f"Invalid path: {path!r}")
    return path
