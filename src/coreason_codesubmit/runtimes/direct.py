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

from loguru import logger

from coreason_codesubmit.capture import OutputSink
from coreason_codesubmit.languages import AdapterKind
from coreason_codesubmit.models import ExecutionOutcome, SourceFile
from coreason_codesubmit.runtime import ExecutionAdapter


class DirectEvalAdapter(ExecutionAdapter):
    """Runs host-language source in-process.

    The file is compiled and executed in a fresh globals namespace whose only
    injected name is ``console``. This is not an isolation boundary: the program
    sees the full builtins and can import anything the host can.
    """

    kind = AdapterKind.DIRECT

    def can_execute(self) -> bool:
        return True

    @property
    def unavailable_message(self) -> str:
        return "Error: in-process evaluation is not available."  # pragma: no cover

    async def run(self, file: SourceFile, sink: OutputSink) -> ExecutionOutcome:
        namespace = {
            "__name__": "__main__",
            "__builtins__": builtins,
            "console": sink.console(),
        }
        try:
            code = compile(file.content, file.name, "exec")
            exec(code, namespace)
        except SystemExit as e:
            if e.code not in (None, 0):
                return ExecutionOutcome.error(f"SystemExit: {e.code}")
        except asyncio.CancelledError:
            raise
        except BaseException as e:
            logger.debug(f"In-process evaluation of {file.name} raised {type(e).__name__}")
            return ExecutionOutcome.error(f"{type(e).__name__}: {e}")

        return ExecutionOutcome.success(sink.text(), self.config.no_output_placeholder)
