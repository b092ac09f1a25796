"""Human-readable byte size parsing and formatting."""

import re
from decimal import Decimal, localcontext

from s3mgr.core.exceptions import InvalidSizeError

KIB = 1024
MIB = 1024**2
GIB = 1024**3

MAX_SIZE = 2**64 - 1

_MULTIPLIERS = {"K": KIB, "M": MIB, "G": GIB, "B": 1, "": 1}
_NUMBER = re.compile(r"\+?(?:\d+(?:\.\d*)?|\.\d+)(?:E[+-]?\d+)?")


def parse_human_size(text: str) -> int:
    """Parse a size such as ``"5M"``, ``"512kb"`` or ``"1.5G"`` into bytes.

    The unit letter is optional and case-insensitive and may be followed by
    a literal ``B``. The number may carry a leading ``+`` and an exponent
    (``"1e3"``). Arithmetic is exact; fractional results are truncated
    toward zero.

    Raises:
        InvalidSizeError: If the text is empty, the number is malformed or
            negative, or the result does not fit in an unsigned 64-bit value.
    """
    value = text.strip().upper()
    if not value:
        raise InvalidSizeError("Size cannot be empty")

    if len(value) > 1 and value.endswith("B") and value[-2] in "KMG":
        unit, number = value[-2], value[:-2]
    elif value[-1] in "KMGB":
        unit, number = value[-1], value[:-1]
    else:
        unit, number = "", value

    number = number.strip()
    if not _NUMBER.fullmatch(number):
        raise InvalidSizeError(f"Invalid number: {number!r}")

    amount = Decimal(number)
    if amount >= MAX_SIZE + 1:
        raise InvalidSizeError(f"Size out of range: {text.strip()}")

    # Enough precision for the product to be exact.
    with localcontext() as ctx:
        ctx.prec = len(number) + 20
        size = amount * _MULTIPLIERS[unit]

    if size >= MAX_SIZE + 1:
        raise InvalidSizeError(f"Size out of range: {text.strip()}")

    return int(size)


def format_human_size(size: int) -> str:
    """Render a byte count with binary units, e.g. ``"512 B"`` or ``"2.00 MB"``."""
    if size < KIB:
        return f"{size} B"
    elif size < MIB:
        return f"{size / KIB:.2f} KB"
    elif size < GIB:
        return f"{size / MIB:.2f} MB"
    else:
        return f"{size / GIB:.2f} GB"
