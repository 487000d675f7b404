"""Checksum classification, retrieval and parsing."""

from .algorithms import DigestEngine, HashAlgorithm
from .parser import ChecksumEntry, find_digest, parse_checksum_entries, parse_checksum_line
from .resolver import ResolvedChecksum, resolve, resolve_expected_digest
from .spec import ChecksumSpec, LiteralDigest, LocalSource, RemoteSource, SourceKind, parse_checksum_spec

__all__ = [
    "ChecksumEntry",
    "ChecksumSpec",
    "DigestEngine",
    "HashAlgorithm",
    "LiteralDigest",
    "LocalSource",
    "RemoteSource",
    "ResolvedChecksum",
    "SourceKind",
    "find_digest",
    "parse_checksum_entries",
    "parse_checksum_line",
    "parse_checksum_spec",
    "resolve",
    "resolve_expected_digest",
]
