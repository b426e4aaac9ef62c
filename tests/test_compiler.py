import subprocess
from unittest.mock import MagicMock, patch

import pytest

from coreason_codesubmit.exceptions import CompilationError, EngineUnavailableError
from coreason_codesubmit.integrations.compiler import CompilerInterpreter
from coreason_codesubmit.runtimes.native import NativeStdio


class RecordingStdio:
    def __init__(self, stdin: str = "") -> None:
        self.written: list[str] = []
        self.reads = 0
        self._stdin = stdin

    def write(self, text: str) -> None:
        self.written.append(text)

    def read(self) -> str:
        self.reads += 1
        return self._stdin

    @property
    def stdio(self) -> NativeStdio:
        return NativeStdio(write=self.write, read=self.read)


def _completed(returncode: int = 0, stdout: str = "", stderr: str = "") -> MagicMock:
    result = MagicMock()
    result.returncode = returncode
    result.stdout = stdout
    result.stderr = stderr
    return result


@pytest.fixture
def interpreter() -> CompilerInterpreter:
    return CompilerInterpreter("/usr/bin/gcc", "/usr/bin/g++", compile_timeout=5, run_timeout=2)


def test_discover_without_compilers() -> None:
    with patch("coreason_codesubmit.integrations.compiler.shutil.which", return_value=None):
        assert CompilerInterpreter.discover() is None


def test_discover_prefers_gcc() -> None:
    with patch("coreason_codesubmit.integrations.compiler.shutil.which", side_effect=lambda name: f"/bin/{name}"):
        found = CompilerInterpreter.discover(compile_timeout=1, run_timeout=2)
    assert found is not None
    assert found.cc == "/bin/gcc"
    assert found.cxx == "/bin/g++"
    assert found.run_timeout == 2


def test_cpp_source_uses_cxx(interpreter: CompilerInterpreter) -> None:
    recorder = RecordingStdio()
    with patch(
        "coreason_codesubmit.integrations.compiler.subprocess.run",
        side_effect=[_completed(), _completed(stdout="hi\n")],
    ) as mock_run:
        code = interpreter.run('#include <iostream>\nint main() { std::cout << "hi"; }', recorder.stdio)

    assert code == 0
    assert recorder.written == ["hi\n"]
    build_cmd = mock_run.call_args_list[0].args[0]
    assert build_cmd[0] == "/usr/bin/g++"
    assert build_cmd[1].endswith("main.cpp")


def test_c_source_uses_cc(interpreter: CompilerInterpreter) -> None:
    with patch(
        "coreason_codesubmit.integrations.compiler.subprocess.run",
        side_effect=[_completed(), _completed()],
    ) as mock_run:
        interpreter.run('#include <stdio.h>\nint main() { puts("x"); }', RecordingStdio().stdio)

    build_cmd = mock_run.call_args_list[0].args[0]
    assert build_cmd[0] == "/usr/bin/gcc"
    assert build_cmd[1].endswith("main.c")


def test_stdin_not_read_without_input_primitives(interpreter: CompilerInterpreter) -> None:
    recorder = RecordingStdio()
    with patch(
        "coreason_codesubmit.integrations.compiler.subprocess.run",
        side_effect=[_completed(), _completed()],
    ) as mock_run:
        interpreter.run("int main() { return 0; }", recorder.stdio)

    assert recorder.reads == 0
    assert mock_run.call_args_list[1].kwargs["input"] is None


def test_stdin_read_once_when_program_reads(interpreter: CompilerInterpreter) -> None:
    recorder = RecordingStdio(stdin="7\n")
    with patch(
        "coreason_codesubmit.integrations.compiler.subprocess.run",
        side_effect=[_completed(), _completed(stdout="14\n")],
    ) as mock_run:
        interpreter.run('int main() { int n; scanf("%d", &n); printf("%d\\n", n * 2); }', recorder.stdio)

    assert recorder.reads == 1
    assert mock_run.call_args_list[1].kwargs["input"] == "7\n"


def test_build_failure_raises(interpreter: CompilerInterpreter) -> None:
    recorder = RecordingStdio()
    with patch(
        "coreason_codesubmit.integrations.compiler.subprocess.run",
        return_value=_completed(returncode=1, stderr="main.c:1: error: expected ';'\n"),
    ) as mock_run:
        with pytest.raises(CompilationError, match="expected ';'"):
            interpreter.run("int main() { return 0 }", recorder.stdio)

    assert mock_run.call_count == 1
    assert recorder.written == []


def test_build_timeout_raises(interpreter: CompilerInterpreter) -> None:
    with patch(
        "coreason_codesubmit.integrations.compiler.subprocess.run",
        side_effect=subprocess.TimeoutExpired(cmd="gcc", timeout=5),
    ):
        with pytest.raises(CompilationError, match="5 seconds"):
            interpreter.run("int main() {}", RecordingStdio().stdio)


def test_run_timeout_keeps_partial_output(interpreter: CompilerInterpreter) -> None:
    recorder = RecordingStdio()
    with patch(
        "coreason_codesubmit.integrations.compiler.subprocess.run",
        side_effect=[_completed(), subprocess.TimeoutExpired(cmd="program", timeout=2, output=b"partial")],
    ):
        with pytest.raises(TimeoutError, match="2 seconds"):
            interpreter.run("int main() { for(;;); }", recorder.stdio)

    assert recorder.written == ["partial"]


def test_exit_code_and_stderr_are_forwarded(interpreter: CompilerInterpreter) -> None:
    recorder = RecordingStdio()
    with patch(
        "coreason_codesubmit.integrations.compiler.subprocess.run",
        side_effect=[_completed(), _completed(returncode=3, stdout="out\n", stderr="err\n")],
    ):
        code = interpreter.run("int main() { return 3; }", recorder.stdio)

    assert code == 3
    assert recorder.written == ["out\n", "err\n"]


def test_signal_termination_raises(interpreter: CompilerInterpreter) -> None:
    with patch(
        "coreason_codesubmit.integrations.compiler.subprocess.run",
        side_effect=[_completed(), _completed(returncode=-11)],
    ):
        with pytest.raises(RuntimeError, match="signal 11"):
            interpreter.run("int main() { int *p = 0; return *p; }", RecordingStdio().stdio)


def test_no_c_compiler_raises() -> None:
    interpreter = CompilerInterpreter(None, None)
    with pytest.raises(EngineUnavailableError):
        interpreter.run("int main() { return 0; }", RecordingStdio().stdio)


def test_stderr_starts_on_its_own_line(interpreter: CompilerInterpreter) -> None:
    recorder = RecordingStdio()
    with patch(
        "coreason_codesubmit.integrations.compiler.subprocess.run",
        side_effect=[_completed(), _completed(stdout="no newline", stderr="warning\n")],
    ):
        interpreter.run('int main() { printf("no newline"); }', recorder.stdio)

    assert "".join(recorder.written) == "no newline\nwarning\n"
