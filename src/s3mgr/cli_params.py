"""Shared CLI parameter definitions.

Options that appear on more than one command are defined once here so
their flags and help text stay consistent across ``up``, ``dl``, ``rm``
and ``config``.

Usage:
    @app.command()
    def up(
        recursive: Annotated[bool, recursive_option("upload")] = False,
        chunk_size: Annotated[Optional[str], chunk_size_option("uploading")] = None,
    ):
        pass
"""

from typing import Optional

import typer

from s3mgr.core.exceptions import InvalidSizeError
from s3mgr.path.sizes import format_human_size, parse_human_size
from s3mgr.schemas import DEFAULT_CHUNK_SIZE

SIZE_EXAMPLES = "e.g. 5M, 1G, 512K"


def recursive_option(verb: str):
    """-r/--recursive flag."""
    return typer.Option(
        "--recursive", "-r", help=f"{verb.capitalize()} directories recursively"
    )


def chunk_size_option(activity: str):
    """-c/--chunk-size option taking a human-readable size."""
    return typer.Option(
        "--chunk-size",
        "-c",
        help=(
            f"Chunk size for {activity} files ({SIZE_EXAMPLES}, "
            f"default from config, initially {format_human_size(DEFAULT_CHUNK_SIZE)})"
        ),
    )


def default_chunk_size_option(flag: str, activity: str):
    """Config option setting a default chunk size."""
    return typer.Option(
        flag, help=f"Default chunk size for {activity} files ({SIZE_EXAMPLES})"
    )


def parse_chunk_size(value: Optional[str], param_hint: str) -> Optional[int]:
    """Parse a chunk-size option value, reporting problems as bad parameters."""
    if value is None:
        return None
    try:
        size = parse_human_size(value)
    except InvalidSizeError as e:
        raise typer.BadParameter(str(e), param_hint=param_hint)
    if size <= 0:
        raise typer.BadParameter("Chunk size must be positive", param_hint=param_hint)
    return size
