# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_codesubmit

from enum import Enum
from uuid import uuid4

from pydantic import BaseModel, Field

from coreason_codesubmit.exceptions import InvalidTransitionError


class FileStatus(str, Enum):
    """Lifecycle state of a submitted file.

    Valid transitions are ``pending -> running -> {success, error}``.
    ``success`` and ``error`` are terminal for a given run.
    """

    PENDING = "pending"
    RUNNING = "running"
    SUCCESS = "success"
    ERROR = "error"

    @property
    def is_terminal(self) -> bool:
        return self in (FileStatus.SUCCESS, FileStatus.ERROR)

    @classmethod
    def can_transition(cls, src: "FileStatus", dst: "FileStatus") -> bool:
        return (src, dst) in _TRANSITIONS


_TRANSITIONS = {
    (FileStatus.PENDING, FileStatus.RUNNING),
    (FileStatus.RUNNING, FileStatus.SUCCESS),
    (FileStatus.RUNNING, FileStatus.ERROR),
}


class SourceFile(BaseModel):
    """A single uploaded source file and the result of its last run.

    Attributes:
        id: Opaque identifier assigned at intake. Never derived from content.
        name: Display name of the file.
        content: Decoded text of the file.
        output: Captured output or error description. Empty until run.
        status: Current lifecycle state.
    """

    id: str = Field(default_factory=lambda: str(uuid4()))
    name: str
    content: str
    output: str = ""
    status: FileStatus = FileStatus.PENDING

    def transition(self, status: FileStatus, output: str | None = None) -> "SourceFile":
        """Return a copy moved to ``status``.

        Raises:
            InvalidTransitionError: If the lifecycle does not allow the move.
        """
        if not FileStatus.can_transition(self.status, status):
            raise InvalidTransitionError(
                f"File {self.name} ({self.id}) cannot move from {self.status.value} to {status.value}"
            )
        update: dict[str, object] = {"status": status}
        if output is not None:
            update["output"] = output
        return self.model_copy(update=update)

    def reset(self) -> "SourceFile":
        """Return a copy back at ``pending`` so a new run can start."""
        return self.model_copy(update={"status": FileStatus.PENDING, "output": ""})


Batch = list[SourceFile]
