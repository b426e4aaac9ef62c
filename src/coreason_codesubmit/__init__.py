# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_codesubmit

"""
coreason-codesubmit
"""

__version__ = "0.1.0"
__author__ = "Gowtham A Rao"
__email__ = "gowtham.rao@coreason.ai"

from .config import CodeSubmitConfig
from .dispatcher import Dispatcher, dispatch
from .host import EngineHost
from .languages import LANGUAGES, AdapterKind, Language, get_language
from .models import ExecutionOutcome, FileStatus, SourceFile
from .runtime import ExecutionAdapter
from .service import CodeSubmit, CodeSubmitAsync

__all__ = [
    "AdapterKind",
    "CodeSubmit",
    "CodeSubmitAsync",
    "CodeSubmitConfig",
    "Dispatcher",
    "EngineHost",
    "ExecutionAdapter",
    "ExecutionOutcome",
    "FileStatus",
    "LANGUAGES",
    "Language",
    "SourceFile",
    "dispatch",
    "get_language",
]
