"""HTTP source pipeline stage for streaming downloads."""

from __future__ import annotations

import contextlib
import logging
from collections.abc import Iterator
from typing import Any

import requests

from ..constants import DEFAULT_HTTP_TIMEOUT, STREAMING_CHUNK_SIZE
from .base import PipelineError, StreamSource

log = logging.getLogger(__name__)


class HttpSource(StreamSource):
    """Streaming source that reads the body of an HTTP GET response."""

    def __init__(
        self,
        session: requests.Session,
        url: str,
        timeout: float = DEFAULT_HTTP_TIMEOUT,
        name: str | None = None,
    ):
        """
        Initialize the HTTP source.

        :param session: requests session to perform the GET with
        :param url: URL to download
        :param timeout: Connect and read timeout in seconds
        :param name: Stage name for logging
        """
        super().__init__(name or "HttpSource")
        self._session = session
        self._url = url
        self._timeout = timeout
        self._response: requests.Response | None = None
        self._chunks: Iterator[bytes] | None = None
        self._content_length: int | None = None

    def initialize(self, context: Any) -> None:
        """Send the request and open the response body for streaming."""
        super().initialize(context)

        try:
            response = self._session.get(self._url, stream=True, timeout=self._timeout)
        except requests.RequestException as e:
            raise PipelineError(f"download failed: {e}", self.name, e) from e

        if response.status_code != requests.codes.ok:
            response.close()
            raise PipelineError(
                f"received invalid status code: {response.status_code} (expected {requests.codes.ok})",
                self.name,
            )

        self._response = response
        content_length = response.headers.get("Content-Length")
        if content_length is not None and content_length.isdigit():
            self._content_length = int(content_length)

        self._log.debug(f"Opened {self._url} ({self._content_length} bytes)")

    def read(self, size: int = -1) -> bytes:
        """
        Read the next chunk of the response body.

        The chunk size is fixed by the first call; chunks may be shorter than ``size``.

        :param size: Maximum number of bytes to read (-1 for all)
        :returns: Bytes read, empty when exhausted
        """
        if self._response is None:
            return b""

        if self._chunks is None:
            self._chunks = self._response.iter_content(size if size > 0 else STREAMING_CHUNK_SIZE)

        try:
            data = b"".join(self._chunks) if size < 0 else next(self._chunks, b"")
        except requests.RequestException as e:
            raise PipelineError(f"failed to read response body: {e}", self.name, e) from e

        return data

    def _close_response(self) -> None:
        if self._response is not None:
            with contextlib.suppress(Exception):
                self._response.close()
            self._response = None

    def finalize(self) -> None:
        self._close_response()

    def abort(self) -> None:
        """Close the response on abort."""
        self._close_response()

    @property
    def content_length(self) -> int | None:
        """Return the content length announced by the server."""
        return self._content_length

