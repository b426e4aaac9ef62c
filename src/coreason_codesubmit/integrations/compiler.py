# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_codesubmit

import re
import shutil
import subprocess
import tempfile
from pathlib import Path

from loguru import logger

from coreason_codesubmit.exceptions import CompilationError, EngineUnavailableError
from coreason_codesubmit.runtimes.native import NATIVE_CONTRACT_VERSION, NativeStdio

_READS_INPUT = re.compile(r"\b(scanf|cin|getchar|fgets|getline|gets)\b")
_CPP_MARKERS = re.compile(r"#include\s*<(iostream|string|vector|map|algorithm)>|\bstd::|\bnamespace\b|\bcout\b")


class CompilerInterpreter:
    """Native engine backed by the system C/C++ compiler.

    Builds the source into a throwaway directory and runs the binary. Stdin is
    collected with a single ``read()`` call, and only when the source uses an
    input primitive.
    """

    contract_version = NATIVE_CONTRACT_VERSION

    def __init__(
        self,
        cc: str | None,
        cxx: str | None,
        compile_timeout: float = 30.0,
        run_timeout: float = 10.0,
    ):
        self.cc = cc
        self.cxx = cxx
        self.compile_timeout = compile_timeout
        self.run_timeout = run_timeout

    @classmethod
    def discover(cls, compile_timeout: float = 30.0, run_timeout: float = 10.0) -> "CompilerInterpreter | None":
        """Locate gcc/g++ (or cc/c++) on PATH. Returns None if neither is present."""
        cc = shutil.which("gcc") or shutil.which("cc")
        cxx = shutil.which("g++") or shutil.which("c++")
        if not cc and not cxx:
            return None
        return cls(cc, cxx, compile_timeout=compile_timeout, run_timeout=run_timeout)

    def _toolchain(self, source: str) -> tuple[str, str]:
        if (_CPP_MARKERS.search(source) or not self.cc) and self.cxx:
            return self.cxx, "main.cpp"
        if self.cc is None:
            raise EngineUnavailableError("No C compiler available.")
        return self.cc, "main.c"

    def run(self, source: str, stdio: NativeStdio) -> int:
        compiler, filename = self._toolchain(source)
        stdin_data = stdio.read() if _READS_INPUT.search(source) else None

        with tempfile.TemporaryDirectory(prefix="codesubmit_") as tmp_dir_str:
            tmp_dir = Path(tmp_dir_str)
            src_path = tmp_dir / filename
            bin_path = tmp_dir / "program"
            src_path.write_text(source, encoding="utf-8")

            logger.debug(f"Compiling {filename} with {compiler}")
            try:
                build = subprocess.run(
                    [compiler, str(src_path), "-o", str(bin_path)],
                    capture_output=True,
                    text=True,
                    timeout=self.compile_timeout,
                )
            except subprocess.TimeoutExpired as e:
                raise CompilationError(f"Compilation exceeded {self.compile_timeout} seconds limit.") from e
            if build.returncode != 0:
                raise CompilationError(build.stderr.strip() or f"{compiler} exited with code {build.returncode}")

            try:
                proc = subprocess.run(
                    [str(bin_path)],
                    input=stdin_data,
                    capture_output=True,
                    text=True,
                    cwd=tmp_dir,
                    timeout=self.run_timeout,
                )
            except subprocess.TimeoutExpired as e:
                if e.stdout:
                    stdio.write(e.stdout if isinstance(e.stdout, str) else e.stdout.decode("utf-8", "replace"))
                raise TimeoutError(f"Execution exceeded {self.run_timeout} seconds limit.") from e

        if proc.stdout:
            stdio.write(proc.stdout)
        if proc.stderr:
            if proc.stdout and not proc.stdout.endswith("\n"):
                stdio.write("\n")
            stdio.write(proc.stderr)
        if proc.returncode < 0:
            raise RuntimeError(f"Program terminated by signal {-proc.returncode}")
        return proc.returncode
