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
import sys
from enum import Enum
from typing import Protocol, runtime_checkable

from loguru import logger

from coreason_codesubmit.capture import OutputSink
from coreason_codesubmit.config import CodeSubmitConfig
from coreason_codesubmit.exceptions import (
    EngineInitializationError,
    EngineUnavailableError,
    VMAlreadyInitializedError,
)
from coreason_codesubmit.languages import AdapterKind
from coreason_codesubmit.models import ExecutionOutcome, SourceFile
from coreason_codesubmit.runtime import ExecutionAdapter


@runtime_checkable
class ForeignVM(Protocol):
    """
    Boot/run hooks of a bytecode VM hosted in this process.
    The VM writes program output to the process-wide stdout/stderr.
    """

    async def boot(self) -> None:
        """
        Start the VM. Raises VMAlreadyInitializedError if it is already running.
        """
        ...

    async def run_main(self, main_class: str, classpath: str, *args: str) -> int:
        """
        Invoke ``main_class`` with ``args`` and return the exit code.
        """
        ...


class VMState(str, Enum):
    UNINITIALIZED = "uninitialized"
    READY = "ready"
    FAILED = "failed"


class VMRuntime:
    """Process-wide owner of a ForeignVM and its one-time boot.

    Boot happens at most once. A failed boot is remembered and reported to
    every later caller instead of being retried.
    """

    def __init__(self, vm: ForeignVM):
        self.vm = vm
        self.state = VMState.UNINITIALIZED
        self.error: BaseException | None = None
        self._lock = asyncio.Lock()

    async def ensure_ready(self) -> None:
        """Boot the VM if needed.

        Raises:
            EngineInitializationError: If the boot failed, now or earlier.
        """
        if self.state == VMState.READY:
            return

        async with self._lock:
            if self.state == VMState.UNINITIALIZED:
                logger.info(f"Booting foreign VM {type(self.vm).__name__}")
                try:
                    await self.vm.boot()
                except VMAlreadyInitializedError:
                    logger.debug("Foreign VM was already initialized")
                except Exception as e:
                    logger.error(f"Foreign VM failed to boot: {e}")
                    self.state = VMState.FAILED
                    self.error = e
                else:
                    logger.info("Foreign VM ready")
                if self.state != VMState.FAILED:
                    self.state = VMState.READY

            if self.state == VMState.FAILED:
                raise EngineInitializationError(str(self.error)) from self.error


class ForeignVMAdapter(ExecutionAdapter):
    """Runs source through a scripting interpreter class inside a foreign VM.

    There is no compile step: the file text is handed to the interpreter in
    evaluate mode, so sources made of several top-level classes may not run.
    """

    kind = AdapterKind.VM

    def __init__(self, runtime: VMRuntime | None, config: CodeSubmitConfig | None = None):
        super().__init__(config)
        self.runtime = runtime

    def can_execute(self) -> bool:
        return self.runtime is not None

    @property
    def unavailable_message(self) -> str:
        return "Error: Java VM runtime not loaded."

    async def run(self, file: SourceFile, sink: OutputSink) -> ExecutionOutcome:
        if self.runtime is None:
            raise EngineUnavailableError(self.unavailable_message)
        try:
            await self.runtime.ensure_ready()
        except EngineInitializationError as e:
            return ExecutionOutcome.error(f"Java VM Error: {e}")

        try:
            echo_to = sys.stderr if self.config.vm_echo_stream == "stderr" else None
            with sink.tee_stdio(echo_to=echo_to):
                exit_code = await self.runtime.vm.run_main(
                    self.config.vm_interpreter_class,
                    self.config.vm_classpath,
                    "-e",
                    file.content,
                )
        except Exception as e:
            logger.warning(f"Foreign VM failed on {file.name}: {e}")
            return ExecutionOutcome.error(f"Java VM Error: {e}")

        if exit_code != 0:
            sink.append(f"\n(Process exited with code {exit_code})")
        return ExecutionOutcome.success(sink.text(), self.config.no_output_placeholder)
