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
from typing import Any, Protocol, runtime_checkable

from loguru import logger

from coreason_codesubmit.capture import OutputSink
from coreason_codesubmit.config import CodeSubmitConfig
from coreason_codesubmit.exceptions import EngineUnavailableError
from coreason_codesubmit.languages import AdapterKind
from coreason_codesubmit.models import ExecutionOutcome, SourceFile
from coreason_codesubmit.runtime import ExecutionAdapter

INPUT_OVERRIDE_TEMPLATE = """
import builtins
def input(prompt=''):
    print(prompt, end='')
    return {answer!r}
builtins.input = input
"""


@runtime_checkable
class EmbeddedInterpreter(Protocol):
    """
    An already-booted embedded Python interpreter owned by the caller.
    """

    def set_stdout(self, *, batched: Callable[[str], None]) -> None: ...

    def set_stderr(self, *, batched: Callable[[str], None]) -> None: ...

    async def run_python_async(self, code: str) -> Any: ...


class EmbeddedInterpreterAdapter(ExecutionAdapter):
    """Runs Python source in a caller-supplied embedded interpreter.

    Without a handle the adapter is unavailable and the dispatcher leaves the
    files untouched rather than failing them.
    """

    kind = AdapterKind.EMBEDDED
    skip_when_unavailable = True

    def __init__(self, handle: EmbeddedInterpreter | None, config: CodeSubmitConfig | None = None):
        super().__init__(config)
        self.handle = handle

    def can_execute(self) -> bool:
        return self.handle is not None

    @property
    def unavailable_message(self) -> str:
        return "Error: Python runtime is not initialized."

    async def run(self, file: SourceFile, sink: OutputSink) -> ExecutionOutcome:
        if self.handle is None:
            raise EngineUnavailableError(self.unavailable_message)
        try:
            self.handle.set_stdout(batched=sink.append)
            self.handle.set_stderr(batched=sink.append)
            await self.handle.run_python_async(INPUT_OVERRIDE_TEMPLATE.format(answer=self.config.input_placeholder))
            await self.handle.run_python_async(file.content)
        except asyncio.CancelledError:
            raise
        except BaseException as e:
            logger.debug(f"Embedded interpreter raised while running {file.name}")
            return ExecutionOutcome.error(str(e))

        return ExecutionOutcome.success(sink.text(), self.config.no_output_placeholder)
