"""
CLI module for handling command-line interface operations.
"""

import importlib.metadata
import logging

import click

from .commands.digest import digest
from .commands.download import download
from .commands.dump_config import dump_config
from .commands.options import FILE_R_E
from .commands.verify import verify
from .constants import PACKAGE_ROOT
from .logging import setup_cli_logging

log = logging.getLogger(PACKAGE_ROOT + ".cli")


class OrderedGroup(click.Group):
    """
    A click Group that keeps track of the order in which commands are added.
    """

    def list_commands(self, ctx):
        """Return the list of commands in the order they were added."""
        return list(self.commands.keys())


def _package_version() -> str:
    try:
        return importlib.metadata.version("checked-download")
    except importlib.metadata.PackageNotFoundError:
        return "unknown"


def build_cli():
    """
    Factory for building the CLI application.
    """

    @click.group(
        cls=OrderedGroup,
        help="Download files and validate them against checksums.",
    )
    @click.version_option(
        version=_package_version(),
        prog_name="checked-download",
        message="%(prog)s v%(version)s",
    )
    @click.option("--log-file", metavar="FILE", type=str, help="Path to log file")
    @click.option(
        "--log-level",
        default="INFO",
        type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]),
        help="Set the log level (default: INFO)",
    )
    @click.option(
        "--config-file",
        "config_files",
        metavar="PATH",
        type=FILE_R_E,
        multiple=True,
        help="Path to a YAML config file, applies to all commands.",
    )
    @click.pass_context
    def cli(ctx: click.Context, log_file: str | None, log_level: str, config_files: tuple[str, ...]):
        """
        Command-line interface function for setting up logging and shared config files.

        :param log_file: Path to the log file. If provided, a file logger will be added.
        :param log_level: Log level for the logger. It should be one of the following:
                           DEBUG, INFO, WARNING, ERROR, CRITICAL.
        :param config_files: config files shared by all commands
        """
        setup_cli_logging(log_file, log_level)
        ctx.ensure_object(dict)
        ctx.obj["config_files"] = config_files

    cli.add_command(download)
    cli.add_command(verify)
    cli.add_command(digest)
    cli.add_command(dump_config)

    return cli


def main():
    """
    Main entry point for the CLI application.
    """
    cli = build_cli()
    cli()


if __name__ == "__main__":
    main()
