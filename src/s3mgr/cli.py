"""Command-line interface for s3mgr.

This module provides directory-like commands over an S3-compatible bucket.

Commands:
    - ls: List objects under a path with sizes and totals
    - md: Create a directory marker
    - mv / cp: Move or copy a single object
    - cat: Print an object as text
    - rm: Remove an object, or a directory with -r
    - up / dl: Upload or download files and directory trees
    - config: View or change stored credentials and defaults

Every command except ``config`` reads the bucket and credentials stored by
``s3mgr config``.
"""

import os
from pathlib import Path
from typing import Annotated, Optional

import typer
from tqdm import tqdm

from . import __version__, open_gateway
from .cli_params import (
    chunk_size_option,
    default_chunk_size_option,
    parse_chunk_size,
    recursive_option,
)
from .core import set_log_level
from .core.exceptions import LocalIOError, S3MgrError
from .display import (
    fmt_dir_path,
    fmt_error,
    fmt_head,
    fmt_info,
    fmt_nested_path,
    fmt_path,
    fmt_success,
    fmt_val,
    fmt_warn,
    listing_progress_bar,
    position_updater,
    transfer_progress_bar,
)
from .objectstorage import (
    describe_entries,
    list_prefix,
    summarize,
)
from .path import ensure_text_path, format_human_size, is_directory
from .schemas import AppConfig
from .storage_config import ConfigStore
from .transfer import (
    copy_object,
    download_directory,
    download_file,
    make_directory,
    move_object,
    object_exists,
    read_text,
    remove,
    resolve_download_path,
    resolve_upload_key,
    stat_object,
    upload_directory,
    upload_file,
)

app = typer.Typer(
    name="s3mgr",
    help="A command-line tool for interacting with S3-compatible storage.",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Display version information."""
    if value:
        typer.echo(f"s3mgr {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        Optional[bool],
        typer.Option("--version", callback=version_callback, help="Show version."),
    ] = None,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-V", help="Log progress details to stderr.")
    ] = False,
) -> None:
    """
    S3mgr: list, move, copy, remove, upload and download objects in an
    S3-compatible bucket as if it had directories.
    """
    if verbose:
        set_log_level("INFO")


def _fail(error: S3MgrError) -> None:
    typer.echo(f"{fmt_error('Error')} ({error.kind}): {error.message}", err=True)
    raise typer.Exit(1)


class _FileBars:
    """One transfer progress bar per file of a recursive transfer."""

    def __init__(self) -> None:
        self._bar: Optional[tqdm] = None

    def __call__(self, local_path: Path, key: str, size: int):
        self.close()
        self._bar = transfer_progress_bar(size, key)
        return position_updater(self._bar)

    def close(self) -> None:
        if self._bar is not None:
            self._bar.close()
            self._bar = None


@app.command("ls")
def ls_cmd(
    path: Annotated[
        Optional[str], typer.Argument(help="Optional path prefix to filter files")
    ] = None,
) -> None:
    """List files in the bucket."""
    try:
        if path is not None:
            ensure_text_path(path)
        gateway = open_gateway(ConfigStore().load())
        entries = list_prefix(gateway, path)
        if not entries:
            typer.echo(fmt_info("No files found"))
            return

        with listing_progress_bar(len(entries)) as bar:
            listing = describe_entries(entries, position_updater(bar))

        for info in listing:
            size_str = format_human_size(info.size)
            if info.is_dir:
                name = fmt_dir_path(info.name)
            else:
                name = fmt_nested_path(info.name)
            typer.echo(f"{size_str:>10}  {name}")

        summary = summarize(listing)
        typer.echo(f"\n{fmt_info('Total')}: {format_human_size(summary.total_bytes)}")
        typer.echo(f"{fmt_info('Files')}: {summary.file_count}")
        typer.echo(f"{fmt_info('Root dirs')}: {summary.dir_count}")

    except S3MgrError as e:
        _fail(e)


@app.command("md")
def md_cmd(
    path: Annotated[str, typer.Argument(help="Path of directory to create")],
) -> None:
    """Create a new directory."""
    try:
        gateway = open_gateway(ConfigStore().load())
        key = make_directory(gateway, ensure_text_path(path))
        typer.echo(
            f"{fmt_success('Directory')} `{fmt_path(key)}` "
            f"{fmt_success('created successfully')}"
        )
    except S3MgrError as e:
        _fail(e)


@app.command("mv")
def mv_cmd(
    source: Annotated[str, typer.Argument(help="Source path in S3")],
    destination: Annotated[str, typer.Argument(help="Destination path in S3")],
) -> None:
    """Move a file from source to destination."""
    try:
        gateway = open_gateway(ConfigStore().load())
        move_object(gateway, ensure_text_path(source), ensure_text_path(destination))
        typer.echo(
            f"`{fmt_path(source)}` {fmt_success('moved to')} "
            f"`{fmt_path(destination)}`"
        )
    except S3MgrError as e:
        _fail(e)


@app.command("cp")
def cp_cmd(
    source: Annotated[str, typer.Argument(help="Source path in S3")],
    destination: Annotated[str, typer.Argument(help="Destination path in S3")],
) -> None:
    """Copy a file from source to destination."""
    try:
        gateway = open_gateway(ConfigStore().load())
        copy_object(gateway, ensure_text_path(source), ensure_text_path(destination))
        typer.echo(
            f"`{fmt_path(source)}` {fmt_success('copied to')} "
            f"`{fmt_path(destination)}`"
        )
    except S3MgrError as e:
        _fail(e)


@app.command("cat")
def cat_cmd(
    path: Annotated[str, typer.Argument(help="Path of the file to display")],
) -> None:
    """Display the contents of a file."""
    try:
        ensure_text_path(path)
        gateway = open_gateway(ConfigStore().load())

        if not object_exists(gateway, path):
            typer.echo(fmt_error(f"File not found: {path}"))
            return

        if is_directory(gateway, path):
            typer.echo(fmt_error(f"{path} is a directory"))
            return

        typer.echo(read_text(gateway, path))

    except S3MgrError as e:
        _fail(e)


@app.command("rm")
def rm_cmd(
    path: Annotated[str, typer.Argument(help="Path to remove")],
    recursive: Annotated[bool, recursive_option("remove")] = False,
) -> None:
    """Remove a file or directory."""
    try:
        ensure_text_path(path)
        gateway = open_gateway(ConfigStore().load())

        if is_directory(gateway, path) and not recursive:
            typer.echo(
                f"{fmt_warn('Error')}: cannot remove '{fmt_path(path)}': "
                "Is a directory\nUse -r flag to remove directories"
            )
            return

        remove(gateway, path, recursive=recursive)
        typer.echo(f"`{fmt_path(path)}` {fmt_success('removed successfully')}")

    except S3MgrError as e:
        _fail(e)


@app.command("up")
def up_cmd(
    path: Annotated[str, typer.Argument(help="Local file path to upload")],
    destination: Annotated[
        Optional[str],
        typer.Option("--destination", "-d", help="Destination path in S3"),
    ] = None,
    recursive: Annotated[bool, recursive_option("upload")] = False,
    chunk_size: Annotated[Optional[str], chunk_size_option("uploading")] = None,
) -> None:
    """Upload a local file or directory to S3."""
    size_override = parse_chunk_size(chunk_size, "--chunk-size")
    try:
        ensure_text_path(path)
        config = ConfigStore().load()
        size = size_override or config.upload_chunk_size
        local_path = Path(path)

        try:
            stat = os.stat(local_path)
        except OSError as e:
            raise LocalIOError(f"Failed to get metadata for {path}: {e}")

        gateway = open_gateway(config)

        if local_path.is_dir():
            if not recursive:
                typer.echo(
                    f"{fmt_warn('Error')}: cannot upload '{fmt_path(path)}': "
                    "Is a directory\nUse -r flag to upload directories"
                )
                return

            bars = _FileBars()
            try:
                upload_directory(gateway, local_path, destination, size, bars)
            finally:
                bars.close()
            typer.echo(fmt_success("Directory uploaded successfully"))
            return

        key = resolve_upload_key(local_path, destination)
        with transfer_progress_bar(stat.st_size, path) as bar:
            upload_file(gateway, local_path, key, size, position_updater(bar))
        typer.echo(
            f"`{fmt_path(path)}` {fmt_success('uploaded to')} `{fmt_path(key)}`"
        )

    except S3MgrError as e:
        _fail(e)


@app.command("dl")
def dl_cmd(
    source: Annotated[str, typer.Argument(help="Source path in S3")],
    destination: Annotated[
        str,
        typer.Argument(help="Local destination path (defaults to current directory)"),
    ] = ".",
    recursive: Annotated[bool, recursive_option("download")] = False,
    chunk_size: Annotated[Optional[str], chunk_size_option("downloading")] = None,
) -> None:
    """Download a file or directory from S3."""
    size_override = parse_chunk_size(chunk_size, "--chunk-size")
    try:
        ensure_text_path(source)
        config = ConfigStore().load()
        size = size_override or config.download_chunk_size
        gateway = open_gateway(config)

        if is_directory(gateway, source):
            if not recursive:
                typer.echo(
                    fmt_warn(
                        "Source is a directory. "
                        "Use -r/--recursive to download directories."
                    )
                )
                return

            bars = _FileBars()
            try:
                download_directory(gateway, source, destination, size, bars)
            finally:
                bars.close()
            return

        target = resolve_download_path(source, destination)
        file_size = stat_object(gateway, source)
        with transfer_progress_bar(file_size, source) as bar:
            download_file(gateway, source, target, size, position_updater(bar))

    except S3MgrError as e:
        _fail(e)


def _display_config(config: AppConfig, show_all: bool) -> None:
    typer.echo(fmt_head("Current S3 Configuration:"))
    typer.echo(f"Access Key ID: {fmt_val(config.s3.access_key)}")
    if not config.s3.secret_key:
        secret = fmt_val("")
    elif show_all:
        secret = fmt_val(config.s3.secret_key)
    else:
        secret = fmt_warn("<hidden>")
    typer.echo(f"Secret Key: {secret}")
    typer.echo(f"Region: {fmt_info(config.s3.region)}")
    typer.echo(f"Bucket: {fmt_val(config.s3.bucket)}")
    typer.echo(f"Endpoint: {fmt_val(config.s3.endpoint or '')}")
    typer.echo(
        f"Upload Chunk Size: {fmt_info(_format_chunk_size(config.upload_chunk_size))}"
    )
    typer.echo(
        "Download Chunk Size: "
        f"{fmt_info(_format_chunk_size(config.download_chunk_size))}"
    )


def _format_chunk_size(size: int) -> str:
    return f"{format_human_size(size)} ({size})"


def _describe_change(
    old_value: str, new_value: str, field_name: str, show_values: bool
) -> Optional[str]:
    """Render ``field: old -> new``, or None if the value did not change."""
    if old_value == new_value:
        return None
    old_shown = old_value if show_values else "<hidden>"
    new_shown = new_value if show_values else "<hidden>"
    return f"{field_name}: {fmt_warn(old_shown)} -> {fmt_success(new_shown)}"


@app.command("config")
def config_cmd(
    access_key: Annotated[
        Optional[str], typer.Option("--access-key", "-a", help="AWS access key ID")
    ] = None,
    secret_key: Annotated[
        Optional[str],
        typer.Option("--secret-key", "-s", help="AWS secret access key"),
    ] = None,
    region: Annotated[
        Optional[str],
        typer.Option("--region", "-r", help="AWS region (e.g., us-east-1)"),
    ] = None,
    bucket: Annotated[
        Optional[str], typer.Option("--bucket", "-b", help="S3 bucket name")
    ] = None,
    endpoint: Annotated[
        Optional[str],
        typer.Option(
            "--endpoint",
            "-e",
            help="Custom S3 endpoint URL (for non-AWS S3-compatible services)",
        ),
    ] = None,
    upload_chunk_size: Annotated[
        Optional[str], default_chunk_size_option("--upload-chunk-size", "uploading")
    ] = None,
    download_chunk_size: Annotated[
        Optional[str],
        default_chunk_size_option("--download-chunk-size", "downloading"),
    ] = None,
    view: Annotated[
        bool, typer.Option("--view", "-v", help="View current configuration")
    ] = False,
    show_all: Annotated[
        bool,
        typer.Option(
            "--all", help="Show all sensitive information including secret keys"
        ),
    ] = False,
    reset: Annotated[
        bool, typer.Option("--reset", help="Reset configuration to default values")
    ] = False,
) -> None:
    """Configure S3 credentials and settings."""
    upload_size = parse_chunk_size(upload_chunk_size, "--upload-chunk-size")
    download_size = parse_chunk_size(download_chunk_size, "--download-chunk-size")

    try:
        store = ConfigStore()

        if reset:
            store.reset()
            typer.echo(fmt_success("Configuration reset to default values"))
            return

        if show_all and not view:
            typer.echo(fmt_warn("--all works only with -v/--view"))
            return

        config = store.load()
        if view:
            _display_config(config, show_all)
            return

        old = config.model_copy(deep=True)
        changes = []

        if access_key is not None:
            changes.append(
                _describe_change(old.s3.access_key, access_key, "Access Key ID", True)
            )
            config.s3.access_key = access_key

        if secret_key is not None:
            changes.append(
                _describe_change(old.s3.secret_key, secret_key, "Secret Key", show_all)
            )
            config.s3.secret_key = secret_key

        if region is not None:
            changes.append(_describe_change(old.s3.region, region, "Region", True))
            config.s3.region = region

        if bucket is not None:
            changes.append(_describe_change(old.s3.bucket, bucket, "Bucket", True))
            config.s3.bucket = bucket

        if endpoint is not None:
            changes.append(
                _describe_change(old.s3.endpoint or "", endpoint, "Endpoint", True)
            )
            config.s3.endpoint = endpoint

        if upload_size is not None:
            changes.append(
                _describe_change(
                    _format_chunk_size(old.upload_chunk_size),
                    _format_chunk_size(upload_size),
                    "Upload Chunk Size",
                    True,
                )
            )
            config.upload_chunk_size = upload_size

        if download_size is not None:
            changes.append(
                _describe_change(
                    _format_chunk_size(old.download_chunk_size),
                    _format_chunk_size(download_size),
                    "Download Chunk Size",
                    True,
                )
            )
            config.download_chunk_size = download_size

        changes = [change for change in changes if change is not None]
        if changes:
            typer.echo(fmt_head("Configuration Changes:"))
            for change in changes:
                typer.echo(change)

        store.save(config)
        typer.echo(fmt_success("Configuration updated successfully"))

    except S3MgrError as e:
        _fail(e)


if __name__ == "__main__":
    app()
