"""Validation pipeline stages."""

from __future__ import annotations

import logging
from os import PathLike
from typing import Any

import requests

from ..checksum.algorithms import DigestEngine, HashAlgorithm
from ..checksum.resolver import resolve_expected_digest
from ..checksum.spec import ChecksumSpec, LiteralDigest, parse_checksum_spec
from ..constants import DEFAULT_HTTP_TIMEOUT
from ..exceptions import ChecksumMismatchError
from .base import StreamObserver

log = logging.getLogger(__name__)


class ChecksumValidator(StreamObserver):
    """
    Validates the digest of data streamed through it against an expected digest.

    Every byte written to the destination must also be passed to :meth:`observe`
    (or :meth:`write`) exactly once. :meth:`validate` may only be called after the
    stream has been read to the end, otherwise its result is meaningless.

    Usage:
        validator = ChecksumValidator(HashAlgorithm.MD5, "d41d8cd98f00b204e9800998ecf8427e")
        for chunk in chunks:
            destination.write(chunk)
            validator.observe(chunk)
        if not validator.validate():
            ...
    """

    def __init__(
        self,
        algorithm: HashAlgorithm | str | None,
        expected_digest: str,
        target_filename: str = "",
        name: str | None = None,
    ):
        """
        Initialize the checksum validator.

        :param algorithm: Hash algorithm, defaults to SHA256 if None
        :param expected_digest: Expected hex digest (any case)
        :param target_filename: Name of the validated file, for messages
        :param name: Stage name for logging
        """
        super().__init__(name or "ChecksumValidator")
        self._engine = DigestEngine(algorithm)
        self._expected_digest = expected_digest.strip().lower()
        self._target_filename = target_filename
        self._valid: bool | None = None

    @property
    def algorithm(self) -> HashAlgorithm:
        return self._engine.algorithm

    @property
    def expected_digest(self) -> str:
        return self._expected_digest

    @property
    def target_filename(self) -> str:
        return self._target_filename

    def observe(self, data: bytes) -> None:
        """Update the digest with observed data."""
        self._engine.update(data)

    def write(self, data: bytes) -> int:
        """Writer interface so the validator can sit next to a destination file."""
        self._engine.update(data)
        return len(data)

    def validate(self) -> bool:
        """
        Compare the digest of all observed data with the expected digest.

        Must only be called once the whole stream has been observed, i.e. after the copy
        loop reached end-of-stream; the validator cannot detect a premature call.
        The first call finalizes the digest; subsequent calls return the same result.
        """
        if self._valid is None:
            calculated = self._engine.hexdigest()
            self._valid = calculated == self._expected_digest
            if self._valid:
                self._log.debug("%s checksum of %s verified: %s", self.algorithm, self._describe_target(), calculated)
            else:
                self._log.debug(
                    "%s checksum mismatch for %s: expected %s, got %s",
                    self.algorithm,
                    self._describe_target(),
                    self._expected_digest,
                    calculated,
                )
        return self._valid

    def finalize(self) -> None:
        """Validate the digest and record the outcome in the context."""
        valid = self.validate()
        self.context.checksums[str(self.algorithm)] = self.calculated_digest
        if not valid:
            self.context.add_mismatch(
                ChecksumMismatchError(self._expected_digest, self.calculated_digest, self._target_filename or None)
            )

    def _describe_target(self) -> str:
        return self._target_filename or "<stream>"

    @property
    def calculated_digest(self) -> str:
        """Return the calculated digest, finalizing it."""
        return self._engine.hexdigest()

    @property
    def bytes_observed(self) -> int:
        return self._engine.bytes_processed

    def get_result(self) -> dict[str, Any]:
        """Return validation results."""
        return {
            "algorithm": str(self.algorithm),
            "checksum": self.calculated_digest,
            "expected": self._expected_digest,
            "size": self.bytes_observed,
            "valid": self.validate(),
        }


def new_validator(
    algorithm: HashAlgorithm | str | None,
    session: requests.Session | None,
    checksum: str | PathLike | ChecksumSpec,
    target_filename: str,
    timeout: float = DEFAULT_HTTP_TIMEOUT,
) -> ChecksumValidator:
    """
    Create a validator for ``target_filename`` from a checksum argument.

    The checksum argument is classified and, for checksum files, fetched and parsed
    right away so that a bad checksum fails before any payload is transferred.

    :param algorithm: Hash algorithm, defaults to SHA256 if None
    :param session: HTTP session for remote checksum files (a new one is used if None)
    :param checksum: literal digest, URL of a checksum file or path to a checksum file
    :param target_filename: base name of the downloaded file
    :param timeout: HTTP timeout for fetching remote checksum files
    :raises InvalidChecksumError: if the checksum argument is malformed
    :raises UnsupportedAlgorithmError: if the algorithm is unknown
    :raises ChecksumSourceError: if the checksum file cannot be retrieved
    :raises DigestNotFoundError: if the checksum file has no digest for ``target_filename``
    """
    spec = parse_checksum_spec(checksum)
    hash_algorithm = HashAlgorithm.parse(algorithm)

    expected = resolve_expected_digest(spec, session, target_filename, timeout)
    if isinstance(spec, LiteralDigest) and len(expected) != hash_algorithm.hex_length:
        log.warning(
            "Checksum %s has %d hex digits but %s digests have %d, validation will fail",
            expected,
            len(expected),
            hash_algorithm,
            hash_algorithm.hex_length,
        )

    return ChecksumValidator(hash_algorithm, expected, target_filename)
