# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_codesubmit

import asyncio
import builtins
import io
import sys
import traceback
import types
from collections.abc import Callable
from typing import Any

from loguru import logger

from coreason_codesubmit.exceptions import InterpreterError

SOURCE_FILENAME = "<exec>"


class _BatchedStream(io.TextIOBase):
    """Text stream that hands complete lines to a callback."""

    def __init__(self, fallback: Callable[[], Any]):
        super().__init__()
        self.callback: Callable[[str], None] | None = None
        self._fallback = fallback
        self._partial = ""

    def writable(self) -> bool:
        return True

    def write(self, s: str) -> int:
        self._partial += s
        *complete, self._partial = self._partial.split("\n")
        for line in complete:
            self._emit(line)
        return len(s)

    def flush_partial(self) -> None:
        if self._partial:
            self._emit(self._partial)
            self._partial = ""

    def _emit(self, line: str) -> None:
        if self.callback is not None:
            self.callback(line)
        else:
            stream = self._fallback()
            stream.write(line + "\n")
            stream.flush()


class NamespaceInterpreter:
    """Long-lived embedded Python interpreter with its own namespace.

    The interpreter keeps one globals dict across runs and its own copy of the
    ``builtins`` module, so replacing ``builtins.input`` from inside a script
    does not leak into the host. ``print`` defaults to the interpreter's
    stdout, which reports complete lines to the callback registered with
    :meth:`set_stdout`.

    A failing program raises :class:`InterpreterError` carrying its traceback.
    ``sys.exit()`` with code 0 or None ends the run normally.

    Boot it once at application start and pass it to every dispatch call.
    """

    def __init__(self) -> None:
        self.stdout = _BatchedStream(lambda: sys.__stdout__)
        self.stderr = _BatchedStream(lambda: sys.__stderr__)

        self.builtins = types.ModuleType("builtins")
        self.builtins.__dict__.update(builtins.__dict__)
        self.builtins.__dict__["print"] = self._print
        self.builtins.__dict__["__import__"] = self._import
        # site.Quitter closes sys.stdin before exiting
        self.builtins.__dict__["exit"] = self.builtins.__dict__["quit"] = _exit

        self.globals: dict[str, Any] = {"__name__": "__main__", "__builtins__": self.builtins}

    @classmethod
    async def boot(cls) -> "NamespaceInterpreter":
        logger.info("Booting embedded Python interpreter")
        return cls()

    def set_stdout(self, *, batched: Callable[[str], None]) -> None:
        self.stdout.callback = batched

    def set_stderr(self, *, batched: Callable[[str], None]) -> None:
        self.stderr.callback = batched

    async def run_python_async(self, code: str) -> Any:
        return await asyncio.to_thread(self._run, code)

    def _run(self, code: str) -> Any:
        try:
            exec(compile(code, SOURCE_FILENAME, "exec"), self.globals)
        except SystemExit as e:
            if e.code not in (None, 0):
                raise InterpreterError(f"SystemExit: {e.code}") from e
        except BaseException as e:
            raise InterpreterError(_format_user_traceback(e)) from e
        finally:
            self.stdout.flush_partial()
            self.stderr.flush_partial()
        return None

    def _print(self, *args: Any, sep: str | None = " ", end: str | None = "\n", file: Any = None, flush: bool = False) -> None:
        builtins.print(*args, sep=sep, end=end, file=file if file is not None else self.stdout, flush=flush)

    def _import(
        self,
        name: str,
        globals: dict[str, Any] | None = None,
        locals: dict[str, Any] | None = None,
        fromlist: tuple[str, ...] = (),
        level: int = 0,
    ) -> Any:
        if name == "builtins" and level == 0:
            return self.builtins
        return builtins.__import__(name, globals, locals, fromlist, level)


def _format_user_traceback(exc: BaseException) -> str:
    """Traceback text starting at the first frame of the submitted program."""
    tb = exc.__traceback__
    while tb is not None and tb.tb_frame.f_code.co_filename != SOURCE_FILENAME:
        tb = tb.tb_next
    return "".join(traceback.format_exception(type(exc), exc, tb)).rstrip("\n")


def _exit(code: Any = None) -> None:
    raise SystemExit(code)
