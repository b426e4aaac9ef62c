# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_codesubmit

"""Output capture for engine runs.

Every adapter run gets its own :class:`OutputSink`. Engines feed it in one of
four ways, depending on what they offer:

* a console object passed into the program (:meth:`OutputSink.console`),
* a character write callback (:meth:`OutputSink.write`),
* a batched line callback (:meth:`OutputSink.append`),
* a temporary tee over the process-wide ``sys.stdout``/``sys.stderr``
  (:meth:`OutputSink.tee_stdio`).

All of them end up in the same ordered line buffer.
"""

import io
import sys
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, TextIO

from loguru import logger


class OutputSink:
    """Ordered line buffer that decouples engine output from the real console."""

    def __init__(self) -> None:
        self._lines: list[str] = []
        self._partial = ""
        self._lock = threading.Lock()
        self.closed = False

    def __enter__(self) -> "OutputSink":
        return self

    def __exit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        self.close()

    def append(self, line: str) -> None:
        """Add one complete line."""
        with self._lock:
            if self.closed:
                logger.debug("Dropping output written to a closed sink")
                return
            self._lines.append(line)

    def write(self, text: str) -> None:
        """Add a fragment of a character stream. Lines are split on newlines."""
        with self._lock:
            if self.closed:
                logger.debug("Dropping output written to a closed sink")
                return
            self._partial += text
            *complete, self._partial = self._partial.split("\n")
            self._lines.extend(complete)

    def flush(self) -> None:
        """Commit a trailing fragment as a complete line."""
        with self._lock:
            if self._partial:
                self._lines.append(self._partial)
                self._partial = ""

    def close(self) -> None:
        self.flush()
        with self._lock:
            self.closed = True

    @property
    def lines(self) -> list[str]:
        with self._lock:
            if self._partial:
                return [*self._lines, self._partial]
            return list(self._lines)

    def text(self) -> str:
        """Captured output joined by newlines."""
        return "\n".join(self.lines)

    def console(self) -> "ConsoleProxy":
        return ConsoleProxy(self)

    @contextmanager
    def tee_stdio(self, echo_to: TextIO | None = None) -> Iterator["OutputSink"]:
        """Temporarily route the process streams through this sink.

        ``sys.stdout`` and ``sys.stderr`` are replaced by tees that record every
        complete line and still forward to the original streams. The originals
        are put back on every exit path.

        Args:
            echo_to: Where the stdout copy is forwarded instead of the original
                ``sys.stdout``, e.g. ``sys.stderr`` when stdout carries a protocol.
        """
        original_out, original_err = sys.stdout, sys.stderr
        out_tee = _TeeStream(self, echo_to if echo_to is not None else original_out)
        err_tee = _TeeStream(self, original_err, prefix="Error: ")
        sys.stdout, sys.stderr = out_tee, err_tee
        try:
            yield self
        finally:
            sys.stdout, sys.stderr = original_out, original_err
            out_tee.flush_partial()
            err_tee.flush_partial()


class ConsoleProxy:
    """Restricted console handed to in-process programs."""

    def __init__(self, sink: OutputSink) -> None:
        self._sink = sink

    @staticmethod
    def _format(args: tuple[Any, ...]) -> str:
        return " ".join(str(arg) for arg in args)

    def log(self, *args: Any) -> None:
        self._sink.append(self._format(args))

    def warn(self, *args: Any) -> None:
        self._sink.append("Warning: " + self._format(args))

    def error(self, *args: Any) -> None:
        self._sink.append("Error: " + self._format(args))


class _TeeStream(io.TextIOBase):
    """Text stream that records lines into a sink and forwards to another stream."""

    def __init__(self, sink: OutputSink, target: TextIO, prefix: str = "") -> None:
        super().__init__()
        self._sink = sink
        self._target = target
        self._prefix = prefix
        self._partial = ""

    def writable(self) -> bool:
        return True

    def write(self, s: str) -> int:
        self._partial += s
        *complete, self._partial = self._partial.split("\n")
        for line in complete:
            self._sink.append(self._prefix + line)
        self._target.write(s)
        return len(s)

    def flush(self) -> None:
        self._target.flush()

    def flush_partial(self) -> None:
        if self._partial:
            self._sink.append(self._prefix + self._partial)
            self._partial = ""
