"""Stage interfaces of the download pipeline and the state they share."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterator
from dataclasses import dataclass, field

from ..constants import STREAMING_CHUNK_SIZE
from ..exceptions import ChecksumMismatchError

log = logging.getLogger(__name__)


class PipelineError(Exception):
    """A stage failed to move data; the transfer cannot complete."""

    def __init__(self, message: str, stage: str | None = None, cause: Exception | None = None):
        self.stage = stage
        self.cause = cause
        super().__init__(f"[{stage}] {message}" if stage else message)


@dataclass
class PipelineContext:
    """
    Outcome of a single transfer, filled in by the stages as they finalize.

    The downloader reads it once all stages are finalized to decide whether the
    transfer succeeded.
    """

    bytes_written: int = 0
    # calculated digests, keyed by algorithm name
    checksums: dict[str, str] = field(default_factory=dict)
    mismatches: list[ChecksumMismatchError] = field(default_factory=list)

    def add_mismatch(self, error: ChecksumMismatchError) -> None:
        self.mismatches.append(error)

    @property
    def verified(self) -> bool:
        """True unless a validator reported a mismatch."""
        return not self.mismatches


class StreamStage(ABC):
    """
    A named step of the pipeline.

    Stages are bound to a context by :meth:`initialize`, then either finalized after
    the stream ended or aborted when the transfer failed, never both.
    """

    def __init__(self, name: str | None = None):
        self._name = name or type(self).__name__
        self._context: PipelineContext | None = None
        self._log = log.getChild(self._name)

    @property
    def name(self) -> str:
        return self._name

    @property
    def context(self) -> PipelineContext:
        if self._context is None:
            raise RuntimeError(f"Stage {self._name} was used before initialize()")
        return self._context

    def initialize(self, context: PipelineContext) -> None:
        self._context = context

    def finalize(self) -> None:  # noqa: B027
        """Called once the whole stream went through the stage."""

    def abort(self) -> None:  # noqa: B027
        """Release resources after a failed transfer."""


class StreamSource(StreamStage):
    """Produces the bytes of the transfer."""

    @abstractmethod
    def read(self, size: int = -1) -> bytes:
        """
        Return the next bytes of the stream.

        :param size: upper bound of bytes to return, -1 for the rest of the stream
        :returns: empty bytes once the stream is exhausted
        """

    def iter_chunks(self, chunk_size: int = STREAMING_CHUNK_SIZE) -> Iterator[bytes]:
        while chunk := self.read(chunk_size):
            yield chunk

    @property
    def content_length(self) -> int | None:
        """Announced size of the stream, None if unknown."""
        return None


class StreamObserver(StreamStage):
    """
    Sees every chunk after it was delivered, without changing it.

    Observers must not interrupt the stream; a failed check is reported through the
    context on finalize.
    """

    @abstractmethod
    def observe(self, data: bytes) -> None: ...


class StreamSink(StreamStage):
    """Delivers the bytes of the transfer to their destination."""

    @abstractmethod
    def write(self, data: bytes) -> int:
        """
        Deliver ``data`` completely or raise :class:`PipelineError`.

        :returns: number of bytes delivered, always ``len(data)``
        """
