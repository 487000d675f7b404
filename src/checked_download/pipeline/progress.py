"""Progress bar pipeline stage."""

from __future__ import annotations

import shutil
import sys
from typing import Any, TextIO

from tqdm.auto import tqdm

from ..constants import TQDM_DEFAULTS
from .base import StreamObserver


class ProgressObserver(StreamObserver):
    """
    Updates a tqdm progress bar with the number of bytes passing through.

    With ``max_width`` set, the line is cut to at most that many columns, or to the
    terminal width if the terminal is narrower.
    """

    def __init__(
        self,
        total: int,
        description: str = "DOWNLOAD",
        postfix: str = "",
        output: TextIO | None = None,
        max_width: int | None = None,
        name: str | None = None,
    ):
        super().__init__(name or "ProgressObserver")
        self._total = total
        self._description = description
        self._postfix = postfix
        self._output = output
        self._max_width = max_width
        self._pbar: Any = None

    def initialize(self, context: Any) -> None:
        super().initialize(context)
        self._pbar = tqdm(
            total=self._total,
            desc=self._description,
            postfix=self._postfix,
            file=self._output if self._output is not None else sys.stderr,
            ncols=self._line_width(),
            **TQDM_DEFAULTS,
        )  # type: ignore[call-overload]

    def _line_width(self) -> int | None:
        # None lets tqdm follow the terminal width
        if self._max_width is None:
            return None
        return min(self._max_width, shutil.get_terminal_size().columns)

    def observe(self, data: bytes) -> None:
        if self._pbar is not None:
            self._pbar.update(len(data))

    def _close(self) -> None:
        if self._pbar is not None:
            self._pbar.close()
            self._pbar = None

    def finalize(self) -> None:
        self._close()

    def abort(self) -> None:
        self._close()
