"""Command for dumping the configuration."""

import json
import logging

import click

from ..utils.config import read_and_merge_config_files, read_config
from .options import config_file, config_files_from_ctx

log = logging.getLogger(__name__)


@click.command()
@config_file
@click.option("--effective", is_flag=True, help="Dump the validated configuration including defaults and env vars.")
@click.pass_context
def dump_config(ctx: click.Context, config_files, effective):
    """
    Dump the merged configuration as read from config files.
    """
    files = config_files_from_ctx(ctx, config_files)
    log.info(f"Configuration files to load: {json.dumps([str(p.absolute()) for p in files], indent=2)}")

    if effective:
        config = read_config(files)
        log.info(f"Effective configuration: {config.model_dump_json(indent=2)}")
        return

    merged = read_and_merge_config_files(files)
    log.info(f"Merged configuration: {json.dumps(merged, indent=2)}")

    log.info(
        "Note this only dumps the merged configuration as read from the files. "
        "It does not validate or process the configuration and ignores any environment variables."
    )
