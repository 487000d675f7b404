"""
Downloading URLs to writers and files with streaming checksum validation.
"""

from __future__ import annotations

import logging
import os
import tempfile
from dataclasses import dataclass
from os import PathLike
from pathlib import Path, PurePosixPath
from typing import BinaryIO, TextIO
from urllib.parse import unquote, urlsplit

import requests

from .checksum.algorithms import HashAlgorithm
from .constants import DEFAULT_HTTP_TIMEOUT, STREAMING_CHUNK_SIZE, TEMP_FILE_PREFIX
from .exceptions import DownloadError
from .pipeline.base import PipelineContext, PipelineError, StreamObserver
from .pipeline.http import HttpSource
from .pipeline.progress import ProgressObserver
from .pipeline.sinks import WriterSink
from .pipeline.utils import abort_all_stages, copy_stream
from .pipeline.validators import ChecksumValidator, new_validator

log = logging.getLogger(__name__)


@dataclass
class ProgressBarOptions:
    """Configuration of the download progress bar."""

    output: TextIO | None = None
    """Where to draw the progress bar. Defaults to stderr."""

    max_width: int | None = None
    """Maximum width of the progress bar. Ignored for narrower terminals."""


@dataclass
class DownloadOptions:
    """Options for downloading a URL to a writer."""

    session: requests.Session | None = None
    """
    Session to perform the download (and any checksum file request) with.
    If None, a new session is created for each download.
    """

    checksum: str | PathLike | None = None
    """
    Either the expected digest, or a URL or path to a checksum file. The file can
    either contain the digest only or lines of the format ``DIGEST FILENAME``.
    If unset, the download is not validated.
    """

    checksum_algorithm: HashAlgorithm | str | None = None
    """Hash algorithm of the checksum (MD5, SHA1, SHA256 or SHA512). Defaults to SHA256."""

    progress_bars: ProgressBarOptions | None = None
    """Progress bar configuration. None (default) disables progress bars."""

    timeout: float = DEFAULT_HTTP_TIMEOUT
    """Connect and read timeout for HTTP requests in seconds."""

    chunk_size: int = STREAMING_CHUNK_SIZE
    """Size of the chunks the payload is copied in."""


@dataclass
class FileDownloadOptions(DownloadOptions):
    """Options for downloading a URL to a file."""

    mkdirs: bool = True
    """Whether to create missing parent directories of the destination."""


def _parse_src(src: str) -> str:
    try:
        parts = urlsplit(src)
    except ValueError as e:
        raise DownloadError(f"invalid src URL {src!r}", e) from e
    if not parts.scheme or not parts.netloc:
        raise DownloadError(f"invalid src URL {src!r}: scheme and host are required")
    return src


def target_filename_for(url: str) -> str:
    """Return the base name of the URL path, which is what checksum files are searched for."""
    return PurePosixPath(unquote(urlsplit(url).path)).name


def download_url(url: str, writer: BinaryIO, options: DownloadOptions | None = None) -> int:
    """
    Download ``url`` to ``writer``, validating the content if a checksum is configured.

    The checksum is resolved before the download starts. The content is hashed as it is
    written, so nothing is buffered beyond a single chunk.

    :param url: absolute URL to download
    :param writer: binary writer receiving the content
    :param options: download options
    :returns: number of bytes written
    :raises ChecksumError: if the checksum cannot be resolved or the content does not match it
    :raises DownloadError: if the transfer fails
    """
    options = options or DownloadOptions()
    target_filename = target_filename_for(url)

    owns_session = options.session is None
    session = options.session if options.session is not None else requests.Session()
    try:
        validator: ChecksumValidator | None = None
        if options.checksum:
            validator = new_validator(
                options.checksum_algorithm,
                session,
                options.checksum,
                target_filename,
                timeout=options.timeout,
            )

        context = PipelineContext()
        source = HttpSource(session, url, timeout=options.timeout)
        sink = WriterSink(writer)
        observers: list[StreamObserver] = []

        log.info("Downloading %s", url)
        try:
            source.initialize(context)
            sink.initialize(context)

            if options.progress_bars is not None and source.content_length:
                progress = ProgressObserver(
                    source.content_length,
                    postfix=target_filename,
                    output=options.progress_bars.output,
                    max_width=options.progress_bars.max_width,
                )
                progress.initialize(context)
                observers.append(progress)

            if validator is not None:
                validator.initialize(context)
                observers.append(validator)

            copy_stream(source, sink, observers, options.chunk_size)

            source.finalize()
            sink.finalize()
            for observer in observers:
                observer.finalize()
        except PipelineError as e:
            abort_all_stages([source, sink, *observers])
            raise DownloadError("download failed", e) from e
        except BaseException:
            abort_all_stages([source, sink, *observers])
            raise

        if not context.verified:
            raise context.mismatches[0]
        for algorithm, digest in context.checksums.items():
            log.info("%s checksum verified for %s: %s", algorithm, target_filename, digest)

        log.debug("Downloaded %d bytes from %s", context.bytes_written, url)
        return context.bytes_written
    finally:
        if owns_session:
            session.close()


def download(src: str, writer: BinaryIO, options: DownloadOptions | None = None) -> int:
    """
    Download the ``src`` URL to ``writer`` using the specified options.

    :raises DownloadError: if ``src`` is not an absolute URL or the transfer fails
    :raises ChecksumError: if checksum resolution or validation fails
    """
    return download_url(_parse_src(src), writer, options)


def download_to_file(src: str, dest: str | PathLike, options: FileDownloadOptions | None = None) -> int:
    """
    Download the ``src`` URL to the file ``dest``.

    The content is streamed into a hidden temporary file next to ``dest``, which is
    renamed to ``dest`` only once the transfer and checksum validation succeeded.
    On any failure the temporary file is removed and ``dest`` is left untouched.

    :param src: absolute URL to download
    :param dest: destination file path
    :param options: download options
    :returns: number of bytes written
    :raises DownloadError: if the transfer or file handling fails
    :raises ChecksumError: if checksum resolution or validation fails
    """
    options = options or FileDownloadOptions()
    url = _parse_src(src)
    dest = Path(dest)

    target_dir = dest.parent
    if not target_dir.is_dir():
        if not options.mkdirs:
            raise DownloadError(f"failed to check destination directory: {target_dir} does not exist")
        log.debug("Creating destination directory %s", target_dir)
        try:
            target_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise DownloadError("failed to create destination directory", e) from e

    try:
        tmp_file = tempfile.NamedTemporaryFile(dir=target_dir, prefix=TEMP_FILE_PREFIX + dest.name, delete=False)
    except OSError as e:
        raise DownloadError("failed to create temp file", e) from e

    tmp_path = Path(tmp_file.name)
    try:
        with tmp_file:
            written = download_url(url, tmp_file, options)  # type: ignore[arg-type]
        try:
            os.replace(tmp_path, dest)
        except OSError as e:
            raise DownloadError("failed to rename temp file to destination", e) from e
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise

    log.info("Saved %s to %s", url, dest)
    return written
