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
import hashlib
import time
from collections.abc import Sequence

from loguru import logger

from coreason_codesubmit.capture import OutputSink
from coreason_codesubmit.config import CodeSubmitConfig
from coreason_codesubmit.factory import AdapterFactory
from coreason_codesubmit.host import EngineHost
from coreason_codesubmit.models import ExecutionOutcome, FileStatus, SourceFile
from coreason_codesubmit.runtime import ExecutionAdapter
from coreason_codesubmit.runtimes.embedded import EmbeddedInterpreter


class Dispatcher:
    """Runs a batch of files through the engine bound to a language.

    Files are executed one at a time. The caller's batch is never mutated; a new
    list of the same length and order is returned. Files that already succeeded
    are copied through untouched, so a batch can be re-dispatched incrementally.
    """

    def __init__(self, host: EngineHost | None = None, config: CodeSubmitConfig | None = None):
        """Initializes the Dispatcher.

        Args:
            host: Engine capabilities. Defaults to the bundled engines found in this process.
            config: Configuration. Defaults to environment-driven settings.
        """
        self.config = config or CodeSubmitConfig()
        self.host = host or EngineHost.from_environment(self.config)
        self._lock = asyncio.Lock()

    async def dispatch(
        self,
        files: Sequence[SourceFile],
        language: str,
        runtime_handle: EmbeddedInterpreter | None = None,
    ) -> list[SourceFile]:
        """Execute every non-successful file in ``files``.

        Args:
            files: The batch, in submission order.
            language: Language id from the catalog.
            runtime_handle: Pre-booted embedded interpreter, used by the embedded engine only.

        Returns:
            list[SourceFile]: A new batch with updated status and output.
        """
        async with self._lock:
            adapter = AdapterFactory.get_adapter(language, self.host, self.config, runtime_handle)
            logger.info(
                "Dispatching batch",
                language=language,
                files=len(files),
                adapter=type(adapter).__name__ if adapter else None,
            )

            results: list[SourceFile] = []
            for file in files:
                if file.status == FileStatus.SUCCESS:
                    results.append(file.model_copy())
                    continue
                results.append(await self._process(file, adapter, language))
            return results

    async def _process(self, file: SourceFile, adapter: ExecutionAdapter | None, language: str) -> SourceFile:
        if adapter is None:
            logger.warning(f"Unsupported language {language!r} for {file.name}")
            return self._fail(file, f"Error: Unsupported language: {language}")

        if not adapter.can_execute():
            if adapter.skip_when_unavailable:
                logger.info(f"Skipping {file.name}: {adapter.kind.value} engine has no runtime handle")
                return file.model_copy()
            logger.warning(f"Engine unavailable for {file.name}: {adapter.unavailable_message}")
            return self._fail(file, adapter.unavailable_message)

        running = self._start(file)
        if self.config.enable_audit_logging:
            logger.info(
                "Executing file",
                file_id=file.id,
                language=language,
                code_hash=hashlib.sha256(file.content.encode("utf-8")).hexdigest(),
            )

        start_time = time.perf_counter()
        with OutputSink() as sink:
            try:
                outcome = await adapter.run(running, sink)
            except asyncio.CancelledError:
                raise
            except BaseException as e:
                logger.exception(f"Adapter {type(adapter).__name__} raised on {file.name}")
                outcome = ExecutionOutcome.error(f"{type(e).__name__}: {e}")
        duration = time.perf_counter() - start_time

        logger.info(f"{file.name} finished: {outcome.status.value} in {duration:.4f}s")
        return running.transition(outcome.status, outcome.output)

    @staticmethod
    def _start(file: SourceFile) -> SourceFile:
        if file.status != FileStatus.PENDING:
            file = file.reset()
        return file.transition(FileStatus.RUNNING)

    def _fail(self, file: SourceFile, message: str) -> SourceFile:
        return self._start(file).transition(FileStatus.ERROR, message)


_default_dispatcher: Dispatcher | None = None


def get_dispatcher() -> Dispatcher:
    """Process-wide dispatcher, created on first use."""
    global _default_dispatcher
    if _default_dispatcher is None:
        _default_dispatcher = Dispatcher()
    return _default_dispatcher


async def dispatch(
    files: Sequence[SourceFile],
    language: str,
    runtime_handle: EmbeddedInterpreter | None = None,
) -> list[SourceFile]:
    """Run ``files`` with the process-wide dispatcher. See :meth:`Dispatcher.dispatch`."""
    return await get_dispatcher().dispatch(files, language, runtime_handle)
