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

from pydantic import BaseModel, Field

from coreason_codesubmit.models.files import FileStatus

NO_OUTPUT = "(No output)"


class ExecutionOutcome(BaseModel):
    """Uniform result of running one file, whatever the engine."""

    status: Literal[FileStatus.SUCCESS, FileStatus.ERROR] = Field(
        ..., description="Terminal status of the run."
    )
    output: str = Field(..., description="Captured output, or a readable error description.")

    @classmethod
    def success(cls, text: str, placeholder: str = NO_OUTPUT) -> "ExecutionOutcome":
        return cls(status=FileStatus.SUCCESS, output=text or placeholder)

    @classmethod
    def error(cls, text: str) -> "ExecutionOutcome":
        return cls(status=FileStatus.ERROR, output=text)

    @property
    def ok(self) -> bool:
        return self.status == FileStatus.SUCCESS
