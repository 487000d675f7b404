"""Parser for checksum files.

Two layouts are understood:

* a single bare digest, optionally surrounded by whitespace::

    d41d8cd98f00b204e9800998ecf8427e

* one ``DIGEST FILENAME`` pair per line, as written by ``sha256sum`` and friends::

    e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855  empty.txt
    ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad *abc.bin
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..exceptions import DigestNotFoundError

log = logging.getLogger(__name__)

# coreutils prefixes file names with '*' when checksumming in binary mode
BINARY_MODE_MARKER = "*"


@dataclass(frozen=True)
class ChecksumEntry:
    """A digest decoded from a checksum file line, with the file name it belongs to (if any)."""

    digest: str
    filename: str | None = None

    @property
    def is_bare(self) -> bool:
        return self.filename is None


def parse_checksum_line(line: str) -> ChecksumEntry | None:
    """
    Decode a single checksum file line.

    :param line: a line of a checksum file
    :return: the decoded entry or None for blank lines
    """
    tokens = line.strip().split(maxsplit=1)
    if not tokens:
        return None

    digest = tokens[0].lower()
    if len(tokens) == 1:
        return ChecksumEntry(digest)

    filename = tokens[1].strip()
    if filename.startswith(BINARY_MODE_MARKER):
        filename = filename[len(BINARY_MODE_MARKER) :]
    return ChecksumEntry(digest, filename)


def parse_checksum_entries(content: str) -> list[ChecksumEntry]:
    """Decode all non-blank lines of a checksum file, keeping their order."""
    entries = []
    for line in content.splitlines():
        entry = parse_checksum_line(line)
        if entry is not None:
            entries.append(entry)
    return entries


def find_digest(content: str, target_filename: str) -> str:
    """
    Select the digest for a file from checksum file content.

    If the content lists any ``DIGEST FILENAME`` pairs, the first pair whose file name
    equals ``target_filename`` wins. Only content without such pairs is treated as a bare
    digest, which then applies regardless of the file name.

    :param content: raw checksum file content
    :param target_filename: base name of the downloaded file
    :return: the lowercase hex digest
    :raises DigestNotFoundError: if no digest applies to ``target_filename``
    """
    entries = parse_checksum_entries(content)
    named = [entry for entry in entries if not entry.is_bare]

    if named:
        for entry in named:
            if entry.filename == target_filename:
                return entry.digest
        log.debug("None of the %d checksum entries matches %s", len(named), target_filename)
        raise DigestNotFoundError(target_filename)

    if entries:
        if len(entries) > 1:
            log.warning("Checksum file holds %d bare digests, using the first one", len(entries))
        return entries[0].digest

    raise DigestNotFoundError(target_filename)
