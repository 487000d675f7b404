"""
Classification of checksum arguments.

A checksum argument is either the expected digest itself, an absolute URL of a
checksum file or the path of a local checksum file. The argument is classified
exactly once, when a validator is constructed.
"""

from __future__ import annotations

import binascii
import logging
from dataclasses import dataclass
from enum import StrEnum
from os import PathLike
from pathlib import Path
from urllib.parse import urlsplit

from ..exceptions import InvalidChecksumError

log = logging.getLogger(__name__)


class SourceKind(StrEnum):
    LITERAL = "literal"
    REMOTE = "remote"
    LOCAL = "local"


@dataclass(frozen=True)
class LiteralDigest:
    """The checksum argument is the expected hex digest."""

    digest: str

    kind = SourceKind.LITERAL

    def __str__(self) -> str:
        return self.digest


@dataclass(frozen=True)
class RemoteSource:
    """The checksum argument is the absolute URL of a checksum file."""

    url: str

    kind = SourceKind.REMOTE

    def __str__(self) -> str:
        return self.url


@dataclass(frozen=True)
class LocalSource:
    """The checksum argument is the path of a local checksum file."""

    path: Path

    kind = SourceKind.LOCAL

    def __str__(self) -> str:
        return str(self.path)


type ChecksumSpec = LiteralDigest | RemoteSource | LocalSource


def is_absolute_url(value: str) -> bool:
    """Check whether the value parses as a URL with both a scheme and a host."""
    try:
        parts = urlsplit(value)
    except ValueError:
        return False
    return bool(parts.scheme) and bool(parts.netloc)


def is_hex_digest(value: str) -> bool:
    """Check whether the value is a non-empty, decodable hex string."""
    if not value:
        return False
    try:
        binascii.unhexlify(value)
    except (binascii.Error, ValueError):
        return False
    return True


def parse_checksum_spec(value: str | PathLike | ChecksumSpec) -> ChecksumSpec:
    """
    Classify a checksum argument.

    The checks are applied in order: absolute URL, hex digest, existing file.

    :param value: the raw checksum argument
    :return: the classified checksum specification
    :raises InvalidChecksumError: if the value matches none of the variants
    """
    if isinstance(value, LiteralDigest | RemoteSource | LocalSource):
        return value

    if isinstance(value, PathLike):
        path = Path(value)
        if path.is_file():
            return LocalSource(path)
        raise InvalidChecksumError(str(value), "no such checksum file")

    raw = value.strip()
    if not raw:
        raise InvalidChecksumError(value, "empty value")

    if is_absolute_url(raw):
        log.debug("Checksum %s is a remote checksum file", raw)
        return RemoteSource(raw)

    if is_hex_digest(raw):
        log.debug("Checksum %s is a literal digest", raw)
        return LiteralDigest(raw.lower())

    path = Path(raw).expanduser()
    if path.is_file():
        log.debug("Checksum %s is a local checksum file", path)
        return LocalSource(path)

    raise InvalidChecksumError(value, "neither a hex digest, an absolute URL nor an existing file")
