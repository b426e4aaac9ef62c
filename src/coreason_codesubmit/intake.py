# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_codesubmit

from collections.abc import Iterable
from pathlib import Path

import aiofiles  # type: ignore[import-untyped]

from coreason_codesubmit.exceptions import UnsupportedContentError
from coreason_codesubmit.languages import resolve_language
from coreason_codesubmit.models import SourceFile


def accepts(language_id: str, filename: str) -> bool:
    """Whether ``filename`` has an extension the language accepts."""
    lang = resolve_language(language_id)
    if lang is None:
        return False
    return Path(filename).suffix.lower() in lang.extensions


async def load_file(path: Path) -> SourceFile:
    """Read a file from disk into a pending SourceFile.

    Args:
        path: The file to read.

    Returns:
        SourceFile: A new file with a fresh id.

    Raises:
        FileNotFoundError: If the path does not exist.
        UnsupportedContentError: If the file is not UTF-8 text.
    """
    if not path.is_file():
        raise FileNotFoundError(f"Source file not found: {path}")

    async with aiofiles.open(path, "rb") as f:
        raw = await f.read()

    try:
        content = raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise UnsupportedContentError(f"{path.name} is not a text file") from e
    if "\x00" in content:
        raise UnsupportedContentError(f"{path.name} is not a text file")

    return SourceFile(name=path.name, content=content)


async def load_batch(paths: Iterable[Path]) -> list[SourceFile]:
    """Load several files, keeping their order."""
    return [await load_file(Path(p)) for p in paths]
