# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_codesubmit

from coreason_codesubmit.config import CodeSubmitConfig
from coreason_codesubmit.host import EngineHost
from coreason_codesubmit.languages import AdapterKind, resolve_language
from coreason_codesubmit.runtime import ExecutionAdapter
from coreason_codesubmit.runtimes.direct import DirectEvalAdapter
from coreason_codesubmit.runtimes.embedded import EmbeddedInterpreter, EmbeddedInterpreterAdapter
from coreason_codesubmit.runtimes.native import NativeInterpreterAdapter
from coreason_codesubmit.runtimes.vm import ForeignVMAdapter


class AdapterFactory:
    """
    Factory to create ExecutionAdapter instances for a language.
    """

    @staticmethod
    def get_adapter(
        language: str,
        host: EngineHost,
        config: CodeSubmitConfig,
        runtime_handle: EmbeddedInterpreter | None = None,
    ) -> ExecutionAdapter | None:
        """
        Returns the adapter bound to ``language``, or None if the language is unknown.
        """
        lang = resolve_language(language)
        if lang is None or not lang.is_executable:
            return None

        if lang.adapter == AdapterKind.DIRECT:
            return DirectEvalAdapter(config)
        elif lang.adapter == AdapterKind.NATIVE:
            return NativeInterpreterAdapter(host.native_interpreter, config)
        elif lang.adapter == AdapterKind.VM:
            return ForeignVMAdapter(host.vm_runtime, config)
        elif lang.adapter == AdapterKind.EMBEDDED:
            return EmbeddedInterpreterAdapter(runtime_handle, config)
        else:
            # This should be unreachable due to the closed AdapterKind enum, but for safety:
            raise ValueError(f"Unknown adapter kind: {lang.adapter}")  # pragma: no cover
