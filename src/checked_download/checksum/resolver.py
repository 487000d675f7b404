"""Retrieval of checksum content from literal, remote and local sources."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from os import PathLike

import requests

from ..constants import DEFAULT_HTTP_TIMEOUT
from ..exceptions import ChecksumSourceError
from .parser import find_digest
from .spec import ChecksumSpec, LiteralDigest, LocalSource, RemoteSource, SourceKind, parse_checksum_spec

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedChecksum:
    """Raw checksum content together with where it came from."""

    content: str
    kind: SourceKind
    location: str


def _fetch_remote(url: str, session: requests.Session, timeout: float) -> str:
    log.info("Fetching checksum file from %s", url)
    try:
        response = session.get(url, timeout=timeout)
    except requests.RequestException as e:
        raise ChecksumSourceError("failed to fetch checksum file", url, e) from e

    with response:
        if not 200 <= response.status_code < 300:
            raise ChecksumSourceError(
                f"failed to fetch checksum file: received status code {response.status_code}",
                url,
            )
        # decoded as UTF-8 like local files; requests would fall back to ISO-8859-1 for text/*
        try:
            return response.content.decode("utf-8")
        except (requests.RequestException, UnicodeDecodeError) as e:
            raise ChecksumSourceError("failed to read checksum file", url, e) from e


def _read_local(source: LocalSource) -> str:
    log.info("Reading checksum file %s", source.path)
    try:
        return source.path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ChecksumSourceError("failed to read checksum file", str(source.path), e) from e


def resolve(
    checksum: str | PathLike | ChecksumSpec,
    session: requests.Session | None = None,
    target_filename: str = "",
    timeout: float = DEFAULT_HTTP_TIMEOUT,
) -> ResolvedChecksum:
    """
    Retrieve the raw checksum content for a checksum argument.

    :param checksum: checksum argument (digest, URL or path) or an already classified spec
    :param session: HTTP session used for remote checksum files, a new one is created if None
    :param target_filename: name of the file the checksum is for (used for logging only)
    :param timeout: HTTP timeout in seconds
    :raises InvalidChecksumError: if the argument cannot be classified
    :raises ChecksumSourceError: if a remote or local checksum file cannot be retrieved
    """
    spec = parse_checksum_spec(checksum)
    log.debug("Resolving %s checksum %s for %s", spec.kind, spec, target_filename or "<unnamed>")

    match spec:
        case LiteralDigest(digest=digest):
            return ResolvedChecksum(digest, spec.kind, "<literal>")
        case RemoteSource(url=url):
            if session is None:
                with requests.Session() as own_session:
                    content = _fetch_remote(url, own_session, timeout)
            else:
                content = _fetch_remote(url, session, timeout)
            return ResolvedChecksum(content, spec.kind, url)
        case LocalSource():
            return ResolvedChecksum(_read_local(spec), spec.kind, str(spec.path))


def resolve_expected_digest(
    checksum: str | PathLike | ChecksumSpec,
    session: requests.Session | None = None,
    target_filename: str = "",
    timeout: float = DEFAULT_HTTP_TIMEOUT,
) -> str:
    """
    Resolve a checksum argument to the lowercase hex digest expected for ``target_filename``.

    :raises InvalidChecksumError: if the argument cannot be classified
    :raises ChecksumSourceError: if the checksum file cannot be retrieved
    :raises DigestNotFoundError: if the checksum file holds no digest for ``target_filename``
    """
    resolved = resolve(checksum, session, target_filename, timeout)
    if resolved.kind is SourceKind.LITERAL:
        return resolved.content

    digest = find_digest(resolved.content, target_filename)
    log.debug("Expected digest for %s from %s: %s", target_filename, resolved.location, digest)
    return digest
