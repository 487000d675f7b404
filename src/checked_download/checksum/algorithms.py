"""Supported hash algorithms and the incremental digest engine."""

from __future__ import annotations

import hashlib
import logging
from enum import StrEnum

from ..exceptions import UnsupportedAlgorithmError

log = logging.getLogger(__name__)


class HashAlgorithm(StrEnum):
    """Hash algorithms a checksum can be validated with."""

    MD5 = "md5"
    SHA1 = "sha1"
    SHA256 = "sha256"
    SHA512 = "sha512"
    # alias, not listed when iterating
    DEFAULT = "sha256"

    @property
    def hex_length(self) -> int:
        """Length of a hex digest produced by this algorithm."""
        return _HEX_LENGTHS[self]

    @classmethod
    def parse(cls, value: HashAlgorithm | str | None) -> HashAlgorithm:
        """
        Map a selector to an algorithm.

        Accepts enum members, names in any case with or without a dash (``SHA-256``)
        and ``None``, which selects the default.

        :raises UnsupportedAlgorithmError: if the selector is unknown
        """
        if value is None:
            return cls.DEFAULT
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            normalized = value.strip().lower().replace("-", "").replace("_", "")
            try:
                return cls(normalized)
            except ValueError:
                pass
        raise UnsupportedAlgorithmError(value)


_HEX_LENGTHS = {
    HashAlgorithm.MD5: 32,
    HashAlgorithm.SHA1: 40,
    HashAlgorithm.SHA256: 64,
    HashAlgorithm.SHA512: 128,
}

_CONSTRUCTORS = {
    HashAlgorithm.MD5: hashlib.md5,
    HashAlgorithm.SHA1: hashlib.sha1,
    HashAlgorithm.SHA256: hashlib.sha256,
    HashAlgorithm.SHA512: hashlib.sha512,
}


class DigestEngine:
    """
    Computes a digest of bytes written to it incrementally.

    Usage:
        engine = DigestEngine(HashAlgorithm.MD5)
        engine.write(chunk1)
        engine.write(chunk2)
        digest = engine.hexdigest()

    Once :meth:`hexdigest` has been called, the digest is frozen and further writes are ignored.
    """

    def __init__(self, algorithm: HashAlgorithm | str | None = None):
        self._algorithm = HashAlgorithm.parse(algorithm)
        self._hasher = _CONSTRUCTORS[self._algorithm]()
        self._bytes_processed = 0
        self._digest: str | None = None

    @property
    def algorithm(self) -> HashAlgorithm:
        return self._algorithm

    def update(self, data: bytes) -> None:
        """Feed bytes into the hash."""
        if self._digest is not None:
            log.warning("Ignoring %d bytes written after the %s digest was finalized", len(data), self._algorithm)
            return
        self._hasher.update(data)
        self._bytes_processed += len(data)

    def write(self, data: bytes) -> int:
        """File-like alias of :meth:`update`, returns the number of bytes consumed."""
        self.update(data)
        return len(data)

    def hexdigest(self) -> str:
        """Return the lowercase hex digest of everything written so far, finalizing the engine."""
        if self._digest is None:
            self._digest = self._hasher.hexdigest().lower()
        return self._digest

    @property
    def finalized(self) -> bool:
        return self._digest is not None

    @property
    def bytes_processed(self) -> int:
        """Return the number of bytes processed."""
        return self._bytes_processed
