# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_codesubmit

from abc import ABC

from pydantic import BaseModel


def test_package_imports() -> None:
    """Tests that the public API is importable from the package root."""
    import coreason_codesubmit
    from coreason_codesubmit import (
        CodeSubmit,
        CodeSubmitAsync,
        Dispatcher,
        ExecutionAdapter,
        ExecutionOutcome,
        SourceFile,
        dispatch,
    )

    assert issubclass(SourceFile, BaseModel)
    assert issubclass(ExecutionOutcome, BaseModel)
    assert issubclass(ExecutionAdapter, ABC)
    assert callable(dispatch)
    assert Dispatcher and CodeSubmit and CodeSubmitAsync
    assert coreason_codesubmit.__version__
    assert sorted(coreason_codesubmit.__all__) == sorted(set(coreason_codesubmit.__all__))
