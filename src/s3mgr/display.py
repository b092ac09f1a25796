"""Console colouring and progress bars for the CLI."""

from typing import Callable

import typer
from tqdm import tqdm


def fmt_head(text: str) -> str:
    return typer.style(text, bold=True)


def fmt_success(text: str) -> str:
    return typer.style(text, fg=typer.colors.GREEN)


def fmt_warn(text: str) -> str:
    return typer.style(text, fg=typer.colors.YELLOW)


def fmt_info(text: str) -> str:
    return typer.style(text, fg=typer.colors.BLUE)


def fmt_error(text: str) -> str:
    return typer.style(text, fg=typer.colors.RED)


def fmt_val(value: str, empty_placeholder: str = "<not set>") -> str:
    """Green value, or a red placeholder when the value is empty."""
    if not value:
        return typer.style(empty_placeholder, fg=typer.colors.RED)
    return typer.style(value, fg=typer.colors.GREEN)


def fmt_path(path: str) -> str:
    """Colour a key as a directory (trailing ``/``) or a file."""
    if path.endswith("/"):
        return typer.style(path, fg=typer.colors.BLUE)
    return typer.style(path, fg=typer.colors.CYAN)


def _join_segments(path: str, last_color: str) -> str:
    parts = path.split("/")
    separator = typer.style("/", fg=typer.colors.BLUE)
    rendered = []
    for i, part in enumerate(parts):
        if not part:
            rendered.append("")
            continue
        color = last_color if i == len(parts) - 1 else typer.colors.CYAN
        rendered.append(typer.style(part, fg=color))
    return separator.join(rendered)


def fmt_nested_path(path: str) -> str:
    """File key with parent segments in cyan and the file name in green."""
    return _join_segments(path, typer.colors.GREEN)


def fmt_dir_path(path: str) -> str:
    """Directory key with every segment in cyan."""
    return _join_segments(path, typer.colors.CYAN)


def transfer_progress_bar(total: int, label: str) -> tqdm:
    """Byte progress bar for one upload or download."""
    return tqdm(
        total=total,
        desc=label,
        unit="B",
        unit_scale=True,
        unit_divisor=1024,
        dynamic_ncols=True,
    )


def listing_progress_bar(total: int) -> tqdm:
    """Item progress bar shown while a listing is being sized."""
    return tqdm(
        total=total,
        desc="Getting file sizes...",
        unit="item",
        leave=False,
        dynamic_ncols=True,
    )


def position_updater(bar: tqdm) -> Callable[[int], None]:
    """Adapt a cumulative-count callback to tqdm's incremental ``update``."""

    def update(position: int) -> None:
        bar.update(position - bar.n)

    return update
