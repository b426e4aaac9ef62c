import sys
from collections.abc import Callable
from typing import Any

import pytest

from coreason_codesubmit.config import CodeSubmitConfig
from coreason_codesubmit.dispatcher import Dispatcher
from coreason_codesubmit.host import EngineHost
from coreason_codesubmit.models import FileStatus, SourceFile


@pytest.fixture
def config() -> CodeSubmitConfig:
    return CodeSubmitConfig(native_yield_delay=0.0, native_stdin="")


@pytest.fixture
def make_file() -> Callable[..., SourceFile]:
    counter = iter(range(1, 1000))

    def _make(content: str = "", status: FileStatus = FileStatus.PENDING, output: str = "") -> SourceFile:
        n = next(counter)
        return SourceFile(id=f"f{n}", name=f"file{n}", content=content, status=status, output=output)

    return _make


@pytest.fixture
def empty_host() -> EngineHost:
    return EngineHost()


@pytest.fixture
def dispatcher(empty_host: EngineHost, config: CodeSubmitConfig) -> Dispatcher:
    return Dispatcher(host=empty_host, config=config)


@pytest.fixture
def stdio_snapshot() -> tuple[Any, Any]:
    return sys.stdout, sys.stderr
