# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_codesubmit

import importlib
import shutil
from pathlib import Path

import pytest

import coreason_codesubmit.utils.logger as logger_module


def test_logger_creates_log_directory() -> None:
    """
    Reloading the logger module re-runs the setup and recreates logs/.
    """
    log_dir = Path("logs")
    if log_dir.exists():
        shutil.rmtree(log_dir)

    importlib.reload(logger_module)

    assert log_dir.is_dir()
    # stderr sink and JSON file sink
    assert len(logger_module.logger._core.handlers) == 2

    logger_module.logger.remove()
    shutil.rmtree(log_dir)


def test_logger_sinks(capsys: pytest.CaptureFixture[str]) -> None:
    """
    A message reaches both stderr and the serialized log file.
    """
    log_dir = Path("logs")
    if log_dir.exists():
        shutil.rmtree(log_dir)
    importlib.reload(logger_module)

    message = "Dispatching test batch"
    logger_module.logger.info(message)

    assert message in capsys.readouterr().err

    # Removing the handlers flushes the enqueued file sink.
    logger_module.logger.remove()
    log_content = (log_dir / "app.log").read_text()
    assert f'"message": "{message}"' in log_content

    shutil.rmtree(log_dir)
