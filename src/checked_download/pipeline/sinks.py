"""Sink pipeline stages."""

from __future__ import annotations

import logging
from typing import BinaryIO

from .base import PipelineError, StreamSink

log = logging.getLogger(__name__)


class WriterSink(StreamSink):
    """Writes chunks to a binary writer (an open file, a socket wrapper, BytesIO, ...)."""

    def __init__(self, writer: BinaryIO, name: str | None = None):
        """
        :param writer: destination; it is flushed on finalize but never closed
        :param name: Stage name for logging
        """
        super().__init__(name or "WriterSink")
        self._writer = writer
        self._bytes_written = 0

    def write(self, data: bytes) -> int:
        # raw writers may accept only part of the buffer per call
        view = memoryview(data)
        try:
            while view:
                written = self._writer.write(view)
                if written is None:
                    # writers without a return value take the whole buffer
                    break
                if written <= 0:
                    raise PipelineError(
                        f"short write: destination accepted {len(data) - len(view)} of {len(data)} bytes",
                        self.name,
                    )
                view = view[written:]
        except OSError as e:
            raise PipelineError(f"failed to copy contents: {e}", self.name, e) from e

        self._bytes_written += len(data)
        return len(data)

    def finalize(self) -> None:
        """Flush the writer and record the delivered size."""
        flush = getattr(self._writer, "flush", None)
        if flush is not None:
            try:
                flush()
            except OSError as e:
                raise PipelineError(f"failed to flush destination: {e}", self.name, e) from e
        self.context.bytes_written = self._bytes_written
