# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_codesubmit

from loguru import logger

from coreason_codesubmit.config import CodeSubmitConfig
from coreason_codesubmit.runtimes.native import NativeInterpreter
from coreason_codesubmit.runtimes.vm import ForeignVM, VMRuntime


class EngineHost:
    """
    Engine capabilities available in this process.
    Any of them may be missing; adapters report that per file.
    """

    def __init__(
        self,
        native_interpreter: NativeInterpreter | None = None,
        vm: ForeignVM | VMRuntime | None = None,
    ):
        self.native_interpreter = native_interpreter
        if vm is None or isinstance(vm, VMRuntime):
            self.vm_runtime = vm
        else:
            self.vm_runtime = VMRuntime(vm)

    @classmethod
    def from_environment(cls, config: CodeSubmitConfig | None = None) -> "EngineHost":
        """Build a host from the bundled engines that can load here."""
        from coreason_codesubmit.integrations.compiler import CompilerInterpreter
        from coreason_codesubmit.integrations.jvm import JPypeVM

        config = config or CodeSubmitConfig()

        native = CompilerInterpreter.discover(
            compile_timeout=config.native_compile_timeout,
            run_timeout=config.native_run_timeout,
        )
        if native is None:
            logger.warning("No C/C++ compiler found on PATH. C/C++ files will fail with 'engine not loaded'.")

        vm: ForeignVM | None = None
        if JPypeVM.available():
            vm = JPypeVM(classpath=config.vm_classpath)
        else:
            logger.warning("JPype1 not installed. Java files will fail with 'runtime not loaded'.")

        return cls(native_interpreter=native, vm=vm)
