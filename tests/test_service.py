from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest

from coreason_codesubmit.config import CodeSubmitConfig
from coreason_codesubmit.host import EngineHost
from coreason_codesubmit.models import FileStatus, SourceFile
from coreason_codesubmit.service import CodeSubmit, CodeSubmitAsync

from fakes import FakeEmbedded


@pytest.fixture
def service(config: CodeSubmitConfig) -> CodeSubmitAsync:
    return CodeSubmitAsync(config=config, host=EngineHost())


@pytest.mark.asyncio
async def test_run_uses_dispatcher(service: CodeSubmitAsync) -> None:
    [result] = await service.run([SourceFile(name="a.py", content='console.log("ok")')], "python-inline")
    assert result.status == FileStatus.SUCCESS
    assert result.output == "ok"


@pytest.mark.asyncio
async def test_runtime_handle_is_forwarded(config: CodeSubmitConfig) -> None:
    handle = FakeEmbedded()
    service = CodeSubmitAsync(config=config, host=EngineHost(), runtime_handle=handle)

    with patch.object(service.dispatcher, "dispatch", new_callable=AsyncMock, return_value=[]) as mock_dispatch:
        await service.run([], "python")

    mock_dispatch.assert_awaited_once_with([], "python", handle)


@pytest.mark.asyncio
async def test_run_paths_loads_then_runs(service: CodeSubmitAsync, tmp_path: Path) -> None:
    first = tmp_path / "one.py"
    second = tmp_path / "two.py"
    first.write_text('console.log("one")')
    second.write_text("raise ValueError('two')")

    results = await service.run_paths([first, second], "python-inline")

    assert [r.name for r in results] == ["one.py", "two.py"]
    assert [r.status for r in results] == [FileStatus.SUCCESS, FileStatus.ERROR]


def test_session_ids_are_unique(config: CodeSubmitConfig) -> None:
    a = CodeSubmitAsync(config=config, host=EngineHost())
    b = CodeSubmitAsync(config=config, host=EngineHost())
    assert a.session_id != b.session_id


def test_sync_facade(config: CodeSubmitConfig) -> None:
    facade = CodeSubmit(config=config, host=EngineHost())

    [result] = facade.run([SourceFile(name="a.py", content='console.log("sync")')], "python-inline")

    assert result.status == FileStatus.SUCCESS
    assert result.output == "sync"


def test_sync_facade_run_paths(config: CodeSubmitConfig, tmp_path: Path) -> None:
    path = tmp_path / "a.py"
    path.write_text('console.error("bad")')
    facade = CodeSubmit(config=config, host=EngineHost())

    [result] = facade.run_paths([path], "python-inline")

    assert result.status == FileStatus.SUCCESS
    assert result.output == "Error: bad"
