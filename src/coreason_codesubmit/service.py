# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_codesubmit

from collections.abc import Sequence
from pathlib import Path
from uuid import uuid4

import anyio
from loguru import logger

from coreason_codesubmit.config import CodeSubmitConfig
from coreason_codesubmit.dispatcher import Dispatcher
from coreason_codesubmit.host import EngineHost
from coreason_codesubmit.intake import load_batch
from coreason_codesubmit.models import SourceFile
from coreason_codesubmit.runtimes.embedded import EmbeddedInterpreter


class CodeSubmitAsync:
    """Async-native submission service (The Core).

    Owns the dispatcher and, optionally, the embedded interpreter handle that is
    shared across runs.
    """

    def __init__(
        self,
        config: CodeSubmitConfig | None = None,
        host: EngineHost | None = None,
        runtime_handle: EmbeddedInterpreter | None = None,
    ):
        """Initializes the CodeSubmitAsync service.

        Args:
            config: Configuration for the dispatcher and engines.
            host: Engine capabilities. Defaults to the bundled engines found in this process.
            runtime_handle: Pre-booted embedded interpreter for Python files.
        """
        self.config = config or CodeSubmitConfig()
        self.dispatcher = Dispatcher(host=host, config=self.config)
        self.runtime_handle = runtime_handle
        self.session_id = str(uuid4())

    async def run(self, files: Sequence[SourceFile], language: str) -> list[SourceFile]:
        """Executes a batch of files.

        Args:
            files: The batch to run.
            language: Language id from the catalog.

        Returns:
            list[SourceFile]: The updated batch.
        """
        logger.info("Running submission", session_id=self.session_id, language=language)
        return await self.dispatcher.dispatch(files, language, self.runtime_handle)

    async def run_paths(self, paths: Sequence[Path], language: str) -> list[SourceFile]:
        """Loads files from disk and executes them.

        Args:
            paths: Files to load, in submission order.
            language: Language id from the catalog.

        Returns:
            list[SourceFile]: The executed batch.
        """
        files = await load_batch(paths)
        return await self.run(files, language)


class CodeSubmit:
    """Sync Facade for CodeSubmitAsync (The Facade).

    Wraps CodeSubmitAsync and executes methods via anyio.run.
    """

    def __init__(
        self,
        config: CodeSubmitConfig | None = None,
        host: EngineHost | None = None,
        runtime_handle: EmbeddedInterpreter | None = None,
    ):
        self._async = CodeSubmitAsync(config, host, runtime_handle)

    def run(self, files: Sequence[SourceFile], language: str) -> list[SourceFile]:
        """Executes a batch of files synchronously."""
        return anyio.run(self._async.run, files, language)

    def run_paths(self, paths: Sequence[Path], language: str) -> list[SourceFile]:
        """Loads and executes files synchronously."""
        return anyio.run(self._async.run_paths, paths, language)
