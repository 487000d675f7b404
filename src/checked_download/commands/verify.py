"""Command for verifying a local file against a checksum."""

import json
import logging
from pathlib import Path

import click

from ..exceptions import ChecksumError
from ..pipeline.validators import new_validator
from ..utils.config import read_config
from .options import FILE_R_E, algorithm, config_file, config_files_from_ctx, output_json

log = logging.getLogger(__name__)


@click.command()
@click.argument("file", metavar="FILE", type=FILE_R_E)
@click.option(
    "--checksum",
    metavar="DIGEST|URL|PATH",
    type=str,
    required=True,
    help="Expected digest, or URL/path of a checksum file with lines of the form 'DIGEST FILENAME'.",
)
@click.option(
    "--name",
    metavar="FILENAME",
    type=str,
    required=False,
    help="File name to look up in the checksum file (default: base name of FILE).",
)
@algorithm
@config_file
@output_json
@click.pass_context
def verify(ctx: click.Context, file, checksum, name, algorithm, config_files, output_json):
    """
    Verify a local FILE against a checksum.
    """
    config = read_config(config_files_from_ctx(ctx, config_files))
    file_path = Path(file)

    try:
        validator = new_validator(
            algorithm or config.checksum_algorithm,
            None,
            checksum,
            name or file_path.name,
            timeout=config.timeout,
        )
    except ChecksumError as e:
        log.error(str(e))
        raise click.ClickException(f"Could not resolve checksum: {e}") from e

    with open(file_path, "rb") as fd:
        while chunk := fd.read(config.chunk_size):
            validator.observe(chunk)

    result = validator.get_result()
    if output_json:
        click.echo(json.dumps({"file": str(file_path), **result}))

    if not result["valid"]:
        log.error(f"Checksum mismatch for {file_path}: expected {result['expected']}, got {result['checksum']}")
        ctx.exit(1)

    log.info(f"{validator.algorithm} checksum of {file_path} verified.")
