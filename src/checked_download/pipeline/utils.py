"""Helpers for running pipeline stages."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from ..constants import STREAMING_CHUNK_SIZE
from .base import StreamObserver, StreamSink, StreamSource, StreamStage

log = logging.getLogger(__name__)


def abort_all_stages(stages: Sequence[StreamStage], logger: logging.Logger | None = None) -> None:
    """
    Abort all pipeline stages, logging but otherwise ignoring errors.

    :param stages: pipeline stages to abort
    :param logger: Optional logger for errors
    """
    _log = logger or log
    for stage in stages:
        try:
            stage.abort()
        except Exception as e:
            _log.debug(f"Error aborting {stage.name}: {e}")


def copy_stream(
    source: StreamSource,
    sink: StreamSink,
    observers: Sequence[StreamObserver] = (),
    chunk_size: int = STREAMING_CHUNK_SIZE,
) -> int:
    """
    Copy all chunks from an initialized source to an initialized sink.

    Each chunk is handed to every observer exactly once, after it was written to the sink.
    Stages are neither finalized nor aborted here.

    :returns: number of bytes copied
    """
    copied = 0
    for chunk in source.iter_chunks(chunk_size):
        sink.write(chunk)
        for observer in observers:
            observer.observe(chunk)
        copied += len(chunk)
    return copied
