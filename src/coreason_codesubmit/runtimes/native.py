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
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from loguru import logger

from coreason_codesubmit.capture import OutputSink
from coreason_codesubmit.config import CodeSubmitConfig
from coreason_codesubmit.exceptions import EngineUnavailableError
from coreason_codesubmit.languages import AdapterKind
from coreason_codesubmit.models import ExecutionOutcome, SourceFile
from coreason_codesubmit.runtime import ExecutionAdapter

NATIVE_CONTRACT_VERSION = 1


@dataclass(frozen=True)
class NativeStdio:
    """I/O callbacks handed to a native interpreter.

    Attributes:
        write: Called with every chunk of text the program emits.
        read: Called, synchronously, when the program needs interactive input.
    """

    write: Callable[[str], None]
    read: Callable[[], str]


@runtime_checkable
class NativeInterpreter(Protocol):
    """
    Contract for bundled C/C++ interpreters.
    """

    contract_version: int

    def run(self, source: str, stdio: NativeStdio) -> int:
        """
        Interpret ``source`` synchronously and return its exit code.
        Raises on compile or runtime faults.
        """
        ...


class NativeInterpreterAdapter(ExecutionAdapter):
    """Bridges to a native-code interpreter registered in the engine host."""

    kind = AdapterKind.NATIVE

    def __init__(
        self,
        interpreter: NativeInterpreter | None,
        config: CodeSubmitConfig | None = None,
        read: Callable[[], str] | None = None,
    ):
        super().__init__(config)
        self.interpreter = interpreter
        self._read = read or self._default_read

    def can_execute(self) -> bool:
        if self.interpreter is None:
            return False
        version = getattr(self.interpreter, "contract_version", None)
        if version != NATIVE_CONTRACT_VERSION:
            logger.warning(
                f"Native interpreter contract v{version} is not supported (expected v{NATIVE_CONTRACT_VERSION})"
            )
            return False
        return True

    @property
    def unavailable_message(self) -> str:
        return "Error: C/C++ engine not loaded."

    def _default_read(self) -> str:
        if self.config.native_stdin is not None:
            return self.config.native_stdin
        # Blocks the event loop; there is no interactive channel to await on.
        return input(self.config.native_input_prompt + " ") or ""

    async def run(self, file: SourceFile, sink: OutputSink) -> ExecutionOutcome:
        if self.interpreter is None:
            raise EngineUnavailableError(self.unavailable_message)
        stdio = NativeStdio(write=sink.write, read=self._read)

        # Let observers see the running state before the synchronous call.
        await asyncio.sleep(self.config.native_yield_delay)

        try:
            exit_code = self.interpreter.run(file.content, stdio)
        except Exception as e:
            logger.warning(f"Native interpreter failed on {file.name}: {e}")
            return ExecutionOutcome.error(f"Runtime Error: {e}")

        if exit_code != 0:
            logger.info(f"{file.name} exited with code {exit_code}")
            sink.flush()
            sink.append(f"\n(Process exited with code {exit_code})")
        return ExecutionOutcome.success(sink.text(), self.config.no_output_placeholder)
