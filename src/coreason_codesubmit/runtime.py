# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_codesubmit

from abc import ABC, abstractmethod

from coreason_codesubmit.capture import OutputSink
from coreason_codesubmit.config import CodeSubmitConfig
from coreason_codesubmit.languages import AdapterKind
from coreason_codesubmit.models import ExecutionOutcome, SourceFile


class ExecutionAdapter(ABC):
    """
    Abstract base class for execution engine adapters.
    Follows the Strategy Pattern.
    """

    kind: AdapterKind

    # Files are left untouched, instead of failed, when the engine is missing.
    skip_when_unavailable: bool = False

    def __init__(self, config: CodeSubmitConfig | None = None):
        self.config = config or CodeSubmitConfig()

    @abstractmethod
    def can_execute(self) -> bool:
        """Whether the engine this adapter drives is present in the host.

        Returns:
            bool: False if a required capability or runtime handle is missing.
        """
        pass  # pragma: no cover

    @property
    @abstractmethod
    def unavailable_message(self) -> str:
        """Per-file error text used when :meth:`can_execute` is False."""
        pass  # pragma: no cover

    @abstractmethod
    async def run(self, file: SourceFile, sink: OutputSink) -> ExecutionOutcome:
        """Run one file and classify the result.

        Engine output goes to ``sink``. Faults raised by the engine or the
        user's program are converted into an error outcome here rather than
        propagated.

        Args:
            file: The file to run. Its status is ``running``.
            sink: Fresh output buffer for this run.

        Returns:
            ExecutionOutcome: Terminal status and output text.
        """
        pass  # pragma: no cover
