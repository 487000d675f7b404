import logging
from collections.abc import Iterable
from copy import deepcopy
from os import PathLike
from pathlib import Path

import yaml
from pydantic import ValidationError

from ..models.config import DownloadConfig

__all__ = [
    "merge_config_dicts",
    "read_and_merge_config_files",
    "read_config",
]

log = logging.getLogger(__name__)


def _merge_into(target: dict, overrides: dict, path: list[str]) -> None:
    for key, new_value in overrides.items():
        key_path = [*path, str(key)]
        if new_value is None:
            # explicit nulls never override
            target.setdefault(key, None)
            continue

        old_value = target.get(key)
        if old_value is None:
            target[key] = deepcopy(new_value)
        elif isinstance(old_value, dict) and isinstance(new_value, dict):
            _merge_into(old_value, new_value, key_path)
        elif type(old_value) is type(new_value):
            log.warning(f"Overriding configuration key {'.'.join(key_path)} with value: {new_value}")
            target[key] = deepcopy(new_value)
        else:
            raise ValueError(f"Conflict at {'.'.join(key_path)}: {old_value!r} != {new_value!r}")


def merge_config_dicts(a: dict, b: dict) -> dict:
    """Merge configuration dictionary ``b`` into a copy of ``a``.

    - Nested dictionaries are merged recursively.
    - Values of the same type in ``b`` replace those in ``a``.
    - ``None`` values never replace a value.
    - Values of different types raise a ``ValueError``.

    :param a: The base configuration.
    :param b: The configuration taking precedence.
    :return: The merged configuration.
    :raises ValueError: If a key has values of conflicting types.
    """
    merged = deepcopy(a)
    _merge_into(merged, b, path=[])
    return merged


def read_and_merge_config_files(config_files: Iterable[str | PathLike]) -> dict:
    """
    Read YAML configuration files and merge them in order, later files taking precedence.

    :raises RuntimeError: If a configuration file cannot be read or merged.
    """
    configuration: dict[str, object] = {}
    for config_file in config_files:
        try:
            with open(config_file) as fd:
                content = yaml.safe_load(fd) or {}
            if not isinstance(content, dict):
                raise ValueError("top level of the configuration must be a mapping")
            configuration = merge_config_dicts(configuration, content)
        except Exception as e:
            raise RuntimeError(f"Error reading configuration file: '{config_file}'") from e

    return configuration


def read_config(config_files: Iterable[str | PathLike] = ()) -> DownloadConfig:
    """
    Build the download configuration from YAML files and environment variables.

    Environment variables (``CHECKED_DOWNLOAD_*``) take precedence over file values.

    :raises RuntimeError: If a file cannot be read or the merged configuration is invalid.
    """
    config_files = [Path(f) for f in config_files]
    log.debug("Reading configuration from %s", [str(f) for f in config_files])
    values = read_and_merge_config_files(config_files)

    try:
        return DownloadConfig(**values)
    except ValidationError as e:
        raise RuntimeError(f"Invalid configuration: {e}") from e
