"""Streaming pipeline components."""

from .base import (
    PipelineContext,
    PipelineError,
    StreamObserver,
    StreamSink,
    StreamSource,
    StreamStage,
)
from .http import HttpSource
from .progress import ProgressObserver
from .sinks import WriterSink
from .validators import ChecksumValidator, new_validator

__all__ = [
    "ChecksumValidator",
    "HttpSource",
    "PipelineContext",
    "PipelineError",
    "ProgressObserver",
    "StreamObserver",
    "StreamSink",
    "StreamSource",
    "StreamStage",
    "WriterSink",
    "new_validator",
]
