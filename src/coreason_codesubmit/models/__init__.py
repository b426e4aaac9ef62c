# src/coreason_codesubmit/models/__init__.py

"""
Data models for submitted files and their execution results.
"""

from .files import Batch, FileStatus, SourceFile
from .outcome import NO_OUTPUT, ExecutionOutcome

__all__ = ["Batch", "ExecutionOutcome", "FileStatus", "NO_OUTPUT", "SourceFile"]
