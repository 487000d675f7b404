"""Command for printing checksum file lines for local files."""

import logging
from pathlib import Path

import click

from ..utils.checksums import calculate_digest
from ..utils.config import read_config
from .options import FILE_R_E, algorithm, config_file, config_files_from_ctx

log = logging.getLogger(__name__)


@click.command()
@click.argument("files", metavar="FILE...", type=FILE_R_E, nargs=-1, required=True)
@algorithm
@config_file
@click.option("--progress/--no-progress", default=True, help="Show a progress bar for large files.")
@click.pass_context
def digest(ctx: click.Context, files, algorithm, config_files, progress):
    """
    Print 'DIGEST  FILENAME' lines for the given files.

    The output can be used as a checksum file for the download and verify commands.
    """
    config = read_config(config_files_from_ctx(ctx, config_files))
    hash_algorithm = algorithm or config.checksum_algorithm

    for file in files:
        file_path = Path(file)
        file_digest = calculate_digest(file_path, hash_algorithm, progress=progress)
        click.echo(f"{file_digest}  {file_path.name}")
