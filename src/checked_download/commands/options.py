"""
Common click options for the CLI commands.
"""

from pathlib import Path

import click
import platformdirs

from ..checksum.algorithms import HashAlgorithm

DEFAULT_CONFIG_PATH = Path(platformdirs.user_config_dir("checked-download")) / "config.yaml"

# Aliases for path types for click options
# Naming convention: {DIR,FILE}_{Read,Write}_{Exists,Create}
FILE_R_E = click.Path(exists=True, file_okay=True, dir_okay=False, readable=True, resolve_path=True)
FILE_RW_C = click.Path(exists=False, file_okay=True, dir_okay=False, writable=True, resolve_path=True)

config_file = click.option(
    "--config-file",
    "config_files",
    metavar="PATH",
    type=FILE_R_E,
    multiple=True,
    required=False,
    help=f"Path to a YAML config file; can be given multiple times, later files take precedence. "
    f"Defaults to {DEFAULT_CONFIG_PATH} if it exists.",
)

checksum = click.option(
    "--checksum",
    metavar="DIGEST|URL|PATH",
    type=str,
    required=False,
    help="Expected digest, or URL/path of a checksum file with lines of the form 'DIGEST FILENAME'.",
)

algorithm = click.option(
    "--algorithm",
    type=click.Choice([a.value for a in HashAlgorithm], case_sensitive=False),
    required=False,
    default=None,
    help="Hash algorithm of the checksum (default: from config, otherwise sha256).",
)

output_json = click.option("--json", "output_json", is_flag=True, help="Output JSON for machine-readability.")


def config_files_from_ctx(ctx: click.Context, config_files: tuple[str, ...] = ()) -> list[Path]:
    """
    Collect config files given to the command group and to the command itself.

    Falls back to the default config path when no file was given and the default exists.
    """
    collected: list[Path] = []
    if ctx.obj:
        collected.extend(Path(p) for p in ctx.obj.get("config_files", ()))
    collected.extend(Path(p) for p in config_files)

    if not collected and DEFAULT_CONFIG_PATH.is_file():
        collected.append(DEFAULT_CONFIG_PATH)
    return collected
