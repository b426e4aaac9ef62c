# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_codesubmit

"""Error taxonomy for the execution dispatcher."""


class CodeSubmitError(Exception):
    """Base class for all errors raised by coreason-codesubmit."""


class EngineUnavailableError(CodeSubmitError):
    """A required engine capability or runtime handle is missing from the host."""


class EngineInitializationError(CodeSubmitError):
    """A one-time bootstrap of a shared engine runtime failed."""


class VMAlreadyInitializedError(EngineInitializationError):
    """The foreign VM was already booted. Callers treat this as a successful boot."""


class CompilationError(CodeSubmitError):
    """The native engine rejected the source before running it."""


class InvalidTransitionError(CodeSubmitError):
    """A file status change that is not allowed by the status lifecycle."""


class UnsupportedContentError(CodeSubmitError):
    """A submitted file is not decodable text."""


class InterpreterError(CodeSubmitError):
    """A program run by the bundled embedded interpreter failed. The message is its traceback."""
