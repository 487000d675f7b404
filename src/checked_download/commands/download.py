"""Command for downloading a file."""

import logging
from pathlib import Path

import click
from click.core import ParameterSource

from ..download import FileDownloadOptions, ProgressBarOptions, download_to_file
from ..exceptions import ChecksumError, ChecksumMismatchError, DownloadError
from ..utils.config import read_config
from .options import FILE_RW_C, algorithm, checksum, config_file, config_files_from_ctx

log = logging.getLogger(__name__)


@click.command()
@click.argument("src", metavar="URL", type=str)
@click.argument("dest", metavar="DEST", type=FILE_RW_C)
@checksum
@algorithm
@config_file
@click.option(
    "--mkdirs/--no-mkdirs",
    default=True,
    help="Create missing parent directories of DEST (default: from config, otherwise enabled).",
)
@click.option(
    "--progress/--no-progress",
    default=True,
    help="Show a progress bar (default: from config, otherwise enabled).",
)
@click.pass_context
def download(ctx: click.Context, src, dest, checksum, algorithm, config_files, mkdirs, progress):
    """
    Download URL to DEST, validating it against a checksum.

    The content is written to a temporary file next to DEST which only replaces DEST
    if the download and checksum validation succeed.
    """
    config = read_config(config_files_from_ctx(ctx, config_files))

    # unset flags fall back to the configuration
    if ctx.get_parameter_source("progress") is ParameterSource.DEFAULT:
        progress = config.progress.enabled
    if ctx.get_parameter_source("mkdirs") is ParameterSource.DEFAULT:
        mkdirs = config.mkdirs

    options = FileDownloadOptions(
        checksum=checksum,
        checksum_algorithm=algorithm or config.checksum_algorithm,
        progress_bars=ProgressBarOptions(max_width=config.progress.max_width) if progress else None,
        timeout=config.timeout,
        chunk_size=config.chunk_size,
        mkdirs=mkdirs,
    )

    if not checksum:
        log.warning("No checksum given, %s will not be validated", src)

    try:
        download_to_file(src, Path(dest), options)
    except ChecksumMismatchError as e:
        log.error(str(e))
        raise click.ClickException(f"Checksum mismatch, {dest} was not written.") from e
    except ChecksumError as e:
        log.error(str(e))
        raise click.ClickException(f"Could not resolve checksum: {e}") from e
    except DownloadError as e:
        log.error(str(e))
        raise click.ClickException(f"Download failed: {e}") from e

    log.info("Download finished!")
