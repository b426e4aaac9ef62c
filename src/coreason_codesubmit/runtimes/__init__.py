# src/coreason_codesubmit/runtimes/__init__.py

"""
Execution adapters, one per engine kind.
"""

from .direct import DirectEvalAdapter
from .embedded import EmbeddedInterpreter, EmbeddedInterpreterAdapter
from .native import NativeInterpreter, NativeInterpreterAdapter, NativeStdio
from .vm import ForeignVM, ForeignVMAdapter, VMRuntime, VMState

__all__ = [
    "DirectEvalAdapter",
    "EmbeddedInterpreter",
    "EmbeddedInterpreterAdapter",
    "ForeignVM",
    "ForeignVMAdapter",
    "NativeInterpreter",
    "NativeInterpreterAdapter",
    "NativeStdio",
    "VMRuntime",
    "VMState",
]
