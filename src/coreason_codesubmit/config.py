# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_codesubmit

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from coreason_codesubmit.models.outcome import NO_OUTPUT


class CodeSubmitConfig(BaseSettings):
    """
    Configuration for the execution dispatcher and its engines.
    """

    no_output_placeholder: str = NO_OUTPUT
    enable_audit_logging: bool = True

    # Native (C/C++) engine
    native_yield_delay: float = Field(default=0.1, ge=0.0, lt=1.0)
    native_input_prompt: str = "Input for C++ program:"
    native_stdin: str | None = None
    native_compile_timeout: float = 30.0
    native_run_timeout: float = 10.0

    # Foreign VM (Java) engine
    # Stream that receives the host-visible copy of VM stdout.
    vm_echo_stream: Literal["stdout", "stderr"] = "stdout"
    vm_interpreter_class: str = "bsh.Interpreter"
    vm_classpath: str = "libs/bsh.jar"

    # Embedded (Python) engine
    input_placeholder: str = "10"

    model_config = SettingsConfigDict(
        env_prefix="COREASON_CODESUBMIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )
